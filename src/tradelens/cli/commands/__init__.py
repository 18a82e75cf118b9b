"""Commands __init__ - exports all commands."""

from tradelens.cli.commands.ranges import ranges_command
from tradelens.cli.commands.report import report_command

__all__ = ["ranges_command", "report_command"]
