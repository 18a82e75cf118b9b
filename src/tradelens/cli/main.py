"""TradeLens CLI main entry point."""

import click

from tradelens import __version__
from tradelens.cli.commands import ranges_command, report_command


@click.group()
@click.version_option(version=__version__)
def main():
    """TradeLens - Trading Journal Analytics"""
    pass


# Register commands
main.add_command(report_command)
main.add_command(ranges_command)


if __name__ == "__main__":
    main()
