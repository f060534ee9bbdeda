"""CLI module for falcon-admin-rotate tool."""

from falcon_admin_rotation.cli.cli_setup import parse_arguments, setup_environment
from falcon_admin_rotation.cli.context import CliContext
from falcon_admin_rotation.cli.operations import handle_rotate, handle_generate
from falcon_admin_rotation.cli.output_strategies import get_output_strategy

__all__ = [
    'parse_arguments',
    'setup_environment',
    'CliContext',
    'handle_rotate',
    'handle_generate',
    'get_output_strategy'
]
