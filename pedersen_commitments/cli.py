"""
Command-Line Interface for Pedersen commitments

Provides commands to generate group parameters and run a commit/add/open
demonstration.
"""

import logging
import sys

import click

from pedersen_commitments import __version__
from pedersen_commitments.commitments import CommitmentEngine
from pedersen_commitments.config import MAX_SECURITY_BITS, MIN_SECURITY_BITS
from pedersen_commitments.exceptions import PedersenError
from pedersen_commitments.params import generate_parameters

DEMO_VALUES = (500, 100, 600)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _check(label: str, ok: bool) -> bool:
    mark = click.style("✓", fg="green") if ok else click.style("✗", fg="red")
    click.echo(f"  {mark} {label}")
    return ok


@click.group()
@click.version_option(version=__version__)
def main():
    """
    Pedersen commitments over a safe-prime group.

    ⚠️  PROTOTYPE - NOT PRODUCTION READY
    """
    pass


@main.command()
@click.option(
    '--security',
    type=click.IntRange(MIN_SECURITY_BITS, MAX_SECURITY_BITS),
    default=None,
    help='Security parameter in bits; p gets twice as many (default: 512)'
)
@click.option(
    '--max-attempts',
    type=click.IntRange(min=1),
    default=None,
    help='Safe-prime search retry budget'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Log parameter generation progress'
)
def generate(security, max_attempts, verbose):
    """Generate public group parameters (p, q, g, h)."""
    _configure_logging(verbose)

    try:
        params = generate_parameters(security, max_attempts=max_attempts)
    except PedersenError as e:
        click.echo(click.style(f"✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(click.style("✓ Parameters generated", fg="green"))
    click.echo(f"security: {params.security_bits}")
    click.echo(f"p: {params.p:#x}")
    click.echo(f"q: {params.q:#x}")
    click.echo(f"g: {params.g:#x}")
    click.echo(f"h: {params.h:#x}")


@main.command()
@click.option(
    '--security',
    type=click.IntRange(MIN_SECURITY_BITS, MAX_SECURITY_BITS),
    default=None,
    help='Security parameter in bits (default: 512)'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Show detailed output'
)
def demo(security, verbose):
    """
    Commit to 500, 100 and 600, add the commitments, and open the sum.

    The combined commitment must open at 1200 and must not open at 1199.
    """
    _configure_logging(verbose)

    click.echo("\n" + "=" * 70)
    click.echo(click.style("Pedersen Commitment Demo", fg="cyan", bold=True))
    click.echo("=" * 70)

    try:
        if verbose:
            click.echo("\nGenerating group parameters...")
        params = generate_parameters(security)
        engine = CommitmentEngine(params)

        click.echo(f"\nGroup: {params.p.bit_length()}-bit p, "
                   f"{params.q.bit_length()}-bit q")

        commitments = [engine.commit(x) for x in DEMO_VALUES]
        if verbose:
            for x, cm in zip(DEMO_VALUES, commitments):
                click.echo(f"  commit({x}) = {cm.c:#x}")

        combined = engine.add([cm.c for cm in commitments])
        openings = [cm.r for cm in commitments]
        total = sum(DEMO_VALUES)

        click.echo("\nChecks:")
        results = [
            _check(
                f"add(...) opens at {total}",
                engine.open(combined, total, openings),
            ),
            _check(
                f"add(...) does not open at {total - 1}",
                not engine.open(combined, total - 1, openings),
            ),
            _check(
                "add([]) opens at 0 with opening 0",
                engine.open(engine.add([]), 0, [0]),
            ),
        ]
    except PedersenError as e:
        click.echo(click.style(f"\n✗ Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo("\n" + "=" * 70)
    if not all(results):
        click.echo(click.style("✗ Demo failed", fg="red"), err=True)
        sys.exit(1)
    click.echo(click.style("✓ Demo complete", fg="green"))


if __name__ == "__main__":
    main()
