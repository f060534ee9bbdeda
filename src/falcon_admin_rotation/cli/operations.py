"""Operations behind the rotate and generate subcommands."""
import json
import sys
from contextlib import contextmanager

from falcon_admin_rotation.cli.cli_setup import build_rotation_mode, read_hosts
from falcon_admin_rotation.cli.output_strategies import get_output_strategy
from falcon_admin_rotation.factories.collaborator_factory import CollaboratorFactory
from falcon_admin_rotation.rotation.generator import RandomPasswordGenerator
from falcon_admin_rotation.rotation.pipeline import RotationPipeline
from falcon_admin_rotation.utils.constants import DEFAULT_ACCOUNT, DEFAULT_MAX_GENERATION_ATTEMPTS


@contextmanager
def open_output(output_file, default=None):
    """Yield the output stream: the named file, or default when none is given."""
    if not output_file:
        yield default
        return
    with open(output_file, 'w', newline='', encoding='utf-8') as f:
        yield f


def build_generator(config) -> RandomPasswordGenerator:
    """Create the random password generator from configuration."""
    attempts = config.get('rotation', {}).get('max_generation_attempts', DEFAULT_MAX_GENERATION_ATTEMPTS)
    return RandomPasswordGenerator(max_attempts=attempts)


def build_pipeline(falcon, config, args, collaborators=None) -> RotationPipeline:
    """Create the rotation pipeline for the rotate subcommand.

    Args:
        falcon: APIHarnessV2 instance
        config: Configuration dictionary
        args: Parsed command line arguments
        collaborators: Optional prebuilt {'probe', 'inventory', 'identity'} mapping

    Returns:
        RotationPipeline
    """
    rotation_config = config.get('rotation', {})
    collaborators = collaborators or CollaboratorFactory.create_collaborators(falcon, config)

    return RotationPipeline(
        probe=collaborators['probe'],
        identity=collaborators['identity'],
        inventory=collaborators['inventory'],
        mode=build_rotation_mode(args),
        account=args.account or rotation_config.get('account', DEFAULT_ACCOUNT),
        generator=build_generator(config),
        revalidate=rotation_config.get('revalidate_token_password', False),
    )


def handle_rotate(ctx, args, collaborators=None, stdin=None) -> dict:
    """Run the rotation batch and stream its outcomes.

    Returns:
        Count of outcomes per status value
    """
    pipeline = build_pipeline(ctx.falcon, ctx.config, args, collaborators)
    ctx.log_verbose(f"Rotating account '{pipeline.account}' in {args.mode} mode")

    strategy = get_output_strategy(args.output_format)
    outcomes = pipeline.run(read_hosts(args, stdin=stdin))

    # Text output without a file goes through the context console
    default_stream = None if args.output_format == 'text' else sys.stdout
    with open_output(args.output_file, default=default_stream) as stream:
        return strategy.output(outcomes, ctx, stream)


def handle_generate(ctx, args, config) -> list:
    """Generate passwords locally and write them out.

    Returns:
        The generated passwords
    """
    generator = build_generator(config)
    passwords = [generator.generate() for _ in range(args.count)]

    with open_output(args.output_file, default=sys.stdout) as stream:
        for password in passwords:
            if args.output_format == 'json':
                stream.write(json.dumps({'password': password}) + '\n')
            else:
                stream.write(password + '\n')

    return passwords
