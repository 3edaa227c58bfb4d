"""
CLI command implementations.
"""

from udfreg.cli.commands.parse import cmd_parse
from udfreg.cli.commands.verify import cmd_verify

__all__ = ["cmd_parse", "cmd_verify"]
