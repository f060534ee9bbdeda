#!/usr/bin/env python3
"""
CrowdStrike Falcon Local Admin Rotation CLI Tool

Rotates a local account password across a fleet of Falcon-managed hosts,
using either random passwords or a static phrase combined with a per-host token.
"""

from falcon_admin_rotation.utils.exceptions import RotationError, ConfigurationError, ApiConnectionError
from falcon_admin_rotation.utils.config import read_config_from_yaml
from falcon_admin_rotation.utils.logger import setup_logging
from falcon_admin_rotation.rotation.results import RotationStatus
from falcon_admin_rotation.cli.operations import handle_rotate, handle_generate
from falcon_admin_rotation.cli.cli_setup import parse_arguments, setup_environment
from falcon_admin_rotation.cli.context import CliContext
from rich.console import Console
import json
import sys

EXIT_HOST_FAILURES = 2


def _handle_error(error, error_type, ctx, exit_code=1):
    """Handle error reporting for both JSON and console output modes."""
    if ctx.json_output_mode:
        print(json.dumps({"error": error_type, "message": str(error)}))
    else:
        ctx.console.print(f"[bold red]{error_type}:[/bold red] {error}")
        if ctx.verbose and hasattr(error, '__traceback__'):
            import traceback
            ctx.console.print(traceback.format_exc())
    sys.exit(exit_code)


def _handle_keyboard_interrupt(ctx):
    """Handle KeyboardInterrupt (Ctrl+C) gracefully."""
    if not ctx.json_output_mode:
        ctx.console.print("\n[yellow]Operation cancelled by user[/yellow]")
    sys.exit(130)


def _run_rotate_mode(args, ctx):
    """Run the rotation batch against the Falcon-managed fleet."""
    try:
        ctx = setup_environment(args)
        counts = handle_rotate(ctx, args)

    except ConfigurationError as e:
        _handle_error(e, "Configuration Error", ctx)

    except ApiConnectionError as e:
        _handle_error(e, "API Connection Error", ctx)

    except RotationError as e:
        _handle_error(e, "Error", ctx)

    except OSError as e:
        _handle_error(e, "I/O Error", ctx)

    except KeyboardInterrupt:
        _handle_keyboard_interrupt(ctx)

    succeeded = counts.get(RotationStatus.SUCCESSFUL.value, 0)
    if succeeded != sum(counts.values()):
        sys.exit(EXIT_HOST_FAILURES)
    sys.exit(0)


def _run_generate_mode(args, ctx):
    """Generate random passwords locally."""
    try:
        config = read_config_from_yaml(args.config)
        setup_logging(config, worker_name="admin-rotate", verbose=args.verbose)
        handle_generate(ctx, args, config)

    except RotationError as e:
        _handle_error(e, "Error", ctx)

    except KeyboardInterrupt:
        _handle_keyboard_interrupt(ctx)


def main():
    """Main CLI entry point - orchestrates the rotation workflow."""
    args = parse_arguments()

    ctx = CliContext(
        console=Console(stderr=(args.output_format != 'text')),
        verbose=args.verbose,
        json_output_mode=(args.output_format == 'json')
    )

    if args.command == 'rotate':
        _run_rotate_mode(args, ctx)
        return

    if args.command == 'generate':
        _run_generate_mode(args, ctx)
        return

    ctx.console.print("[bold red]Error:[/bold red] No command given. Use 'rotate' or 'generate' (see --help)")
    sys.exit(1)


if __name__ == "__main__":
    main()
