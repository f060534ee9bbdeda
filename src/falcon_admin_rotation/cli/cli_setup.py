"""CLI setup and initialization functions."""
import argparse
import os
import sys
from typing import Iterator, List, Optional

from dotenv import load_dotenv
from falconpy import APIHarnessV2
from rich.console import Console

from falcon_admin_rotation.cli.context import CliContext
from falcon_admin_rotation.rotation.complexity import validate_phrase
from falcon_admin_rotation.rotation.strategy import RandomConfig, TokenConfig
from falcon_admin_rotation.rotation.token import PositionMode, TokenKind
from falcon_admin_rotation.utils.config import read_config_from_yaml
from falcon_admin_rotation.utils.exceptions import ApiConnectionError, ConfigurationError, ValidationError
from falcon_admin_rotation.utils.logger import setup_logging

TOKEN_CHOICES = {kind.value.lower(): kind for kind in TokenKind}
POSITION_CHOICES = {position.value.lower(): position for position in PositionMode}


def validate_phrase_arg(value: str) -> str:
    """Validate the --phrase argument.

    Args:
        value: Phrase supplied on the command line

    Returns:
        The validated phrase

    Raises:
        argparse.ArgumentTypeError: If the phrase fails length or complexity rules
    """
    try:
        return validate_phrase(value)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e))


def validate_positive_int(value: str) -> int:
    """Validate a positive integer argument."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number: {value}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"Value must be at least 1, got {number}")
    return number


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="CrowdStrike Falcon Local Admin Rotation - Rotate a local account password across a fleet of hosts",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    # Global arguments - Connection Configuration
    parser.add_argument(
        "-c", "--config",
        default="config/config.yaml",
        help="Path to configuration YAML file (default: config/config.yaml)"
    )
    parser.add_argument(
        "--client-id",
        help="CrowdStrike API Client ID (overrides config file)"
    )
    parser.add_argument(
        "--client-secret",
        help="CrowdStrike API Client Secret (overrides config file)"
    )
    parser.add_argument(
        "--base-url",
        help="CrowdStrike API Base URL, e.g., US1, US2, EU1, GOV1, GOV2 (overrides config file)"
    )

    # Global arguments - Output Options
    parser.add_argument(
        "--output-format",
        choices=['text', 'json', 'csv'],
        default='text',
        help="Output format (default: text)"
    )
    parser.add_argument(
        "--output-file",
        help="Write output to file instead of stdout"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    # Create subcommands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Subcommand: rotate
    rotate_parser = subparsers.add_parser(
        'rotate',
        help='Rotate the local account password on each host',
        description='Check each host, derive its new password and apply it, reporting one result per host'
    )
    rotate_parser.add_argument(
        '--hosts',
        help='Comma-separated list of hostnames. Example: --hosts "WKS01,WKS02"'
    )
    rotate_parser.add_argument(
        '--hosts-file',
        help="File with one hostname per line. Use '-' to read from stdin"
    )
    rotate_parser.add_argument(
        '-a', '--account',
        help='Local account to rotate (default: rotation.account from config, Administrator)'
    )
    rotate_parser.add_argument(
        '-m', '--mode',
        choices=['random', 'token'],
        default='random',
        help='Password derivation mode (default: random)'
    )
    rotate_parser.add_argument(
        '--position',
        choices=sorted(POSITION_CHOICES),
        default='append',
        help="Token mode: 'append' gives token+phrase, 'prepend' gives phrase+token (default: append)"
    )
    rotate_parser.add_argument(
        '--phrase',
        type=validate_phrase_arg,
        help='Token mode: static phrase, 4-60 characters with lowercase, uppercase, digit and symbol'
    )
    rotate_parser.add_argument(
        '--token',
        choices=sorted(TOKEN_CHOICES),
        help='Token mode: per-host token source'
    )

    # Subcommand: generate
    generate_parser = subparsers.add_parser(
        'generate',
        help='Print random passwords without contacting any host',
        description='Generate complexity-compliant random passwords locally'
    )
    generate_parser.add_argument(
        '-n', '--count',
        type=validate_positive_int,
        default=1,
        help='Number of passwords to generate (default: 1)'
    )

    return parser.parse_args(argv)


def build_rotation_mode(args):
    """Build the rotation mode from parsed arguments.

    Args:
        args: Parsed command line arguments for the rotate subcommand

    Returns:
        RandomConfig or TokenConfig

    Raises:
        ConfigurationError: If token mode is missing its phrase or token
    """
    if args.mode == 'random':
        return RandomConfig()

    if not args.phrase:
        raise ConfigurationError("Token mode requires --phrase")
    if not args.token:
        raise ConfigurationError("Token mode requires --token (serial, hostname or mac)")

    return TokenConfig(
        position=POSITION_CHOICES[args.position],
        phrase=args.phrase,
        token_kind=TOKEN_CHOICES[args.token]
    )


def _clean_hosts(lines) -> Iterator[str]:
    for line in lines:
        host = line.strip()
        if host and not host.startswith('#'):
            yield host


def read_hosts(args, stdin=None) -> Iterator[str]:
    """Yield hostnames from --hosts, --hosts-file, or stdin.

    Hosts are produced lazily so a long host file is consumed as the batch runs.

    Args:
        args: Parsed command line arguments
        stdin: Stream used for '-' or when no host option is given (defaults to sys.stdin)

    Yields:
        Hostnames, stripped, without blanks or '#' comments
    """
    stdin = stdin or sys.stdin

    if args.hosts:
        yield from _clean_hosts(args.hosts.split(','))

    if args.hosts_file == '-':
        yield from _clean_hosts(stdin)
    elif args.hosts_file:
        with open(args.hosts_file, 'r', encoding='utf-8') as f:
            yield from _clean_hosts(f)

    if not args.hosts and not args.hosts_file:
        yield from _clean_hosts(stdin)


def load_configuration(args, ctx) -> dict:
    """Load and validate configuration.

    Args:
        args: Parsed command line arguments
        ctx: CLI context

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If configuration is invalid
    """
    try:
        ctx.log_verbose(f"Loading configuration from {args.config}")
        config = read_config_from_yaml(args.config)
        setup_logging(config, worker_name="admin-rotate", verbose=args.verbose)
        return config
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}")


def _resolve_credential(cli_value, env_name, config_value):
    # Priority: CLI arg > ENV var > config file
    return cli_value or os.environ.get(env_name) or config_value


def build_api_credentials(args, config) -> dict:
    """Build API credentials from arguments, environment and config.

    Args:
        args: Parsed command line arguments
        config: Configuration dictionary

    Returns:
        API credentials dictionary for APIHarnessV2

    Raises:
        ConfigurationError: If client_id or client_secret is missing
    """
    # Load environment variables from .env file if present
    load_dotenv()

    creds_config = config.get('falcon_credentials', {})
    prefix = creds_config.get('prefix', '')

    apicreds = {
        'client_id': _resolve_credential(args.client_id, prefix + 'CLIENT_ID', creds_config.get('client_id')),
        'client_secret': _resolve_credential(args.client_secret, prefix + 'CLIENT_SECRET', creds_config.get('client_secret')),
        'base_url': _resolve_credential(args.base_url, prefix + 'BASE_URL', creds_config.get('base_url')) or 'US1'
    }

    if not apicreds['client_id']:
        raise ConfigurationError(f"No client_id provided. Use --client-id, set {prefix}CLIENT_ID env var, or configure in YAML")
    if not apicreds['client_secret']:
        raise ConfigurationError(f"No client_secret provided. Use --client-secret, set {prefix}CLIENT_SECRET env var, or configure in YAML")

    return apicreds


def setup_falcon_api(apicreds, ctx) -> APIHarnessV2:
    """Setup Falcon API connection and verify authentication.

    Args:
        apicreds: API credentials dictionary
        ctx: CLI context

    Returns:
        Authenticated APIHarnessV2 instance

    Raises:
        ApiConnectionError: If API connection fails
    """
    try:
        ctx.log_verbose("Connecting to CrowdStrike Falcon API...")
        falcon = APIHarnessV2(**apicreds)
        authenticated = falcon.login()
    except Exception as e:
        raise ApiConnectionError(f"Failed to connect to CrowdStrike API: {e}")

    if not authenticated:
        raise ApiConnectionError("Failed to authenticate to CrowdStrike API, check client_id and client_secret")
    return falcon


def setup_environment(args) -> CliContext:
    """Setup complete environment (config, API).

    Args:
        args: Parsed command line arguments

    Returns:
        CliContext with config loaded and the Falcon API connected
    """
    # Status messages go to stderr when stdout carries machine-readable output
    ctx = CliContext(
        console=Console(stderr=(args.output_format != 'text')),
        verbose=args.verbose,
        json_output_mode=(args.output_format == 'json')
    )

    config = load_configuration(args, ctx)
    apicreds = build_api_credentials(args, config)
    falcon = setup_falcon_api(apicreds, ctx)

    if not ctx.json_output_mode:
        ctx.console.print(f"[bold]Connected to CrowdStrike ({apicreds['base_url']})[/bold]\n")

    ctx.config = config
    ctx.falcon = falcon
    return ctx
