"""caribic CLI - Command line interface for the bridge testbed."""

from caribic.cli.commands import cli


def main() -> None:
    """Main entry point for the caribic CLI."""
    cli()


__all__ = ["main", "cli"]
