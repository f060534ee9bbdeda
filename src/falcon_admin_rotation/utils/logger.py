# logger.py
import logging
import os

from rich.console import Console
from rich.logging import RichHandler


def _file_handler(log_file, prefix):
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    handler = logging.FileHandler(log_file, encoding='utf-8')
    handler.setFormatter(logging.Formatter(
        f"[{prefix}] %(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    return handler


# Rotation runs log to a file; verbose runs also mirror records to stderr.
# Passwords must never be passed to a log call.
def setup_logging(config, worker_name="admin-rotate", verbose=False):
    prefix = f"{worker_name}.{os.getpid()}"

    # Accept either the full config or just its 'logging' section
    logging_config = config.get('logging', config) if isinstance(config, dict) else {}

    log_file = logging_config.get('file', 'logs/app.log')
    log_level = getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO)

    handlers = [_file_handler(log_file, prefix)]
    if verbose:
        handlers.append(RichHandler(console=Console(stderr=True), show_path=False))

    # Replace any handlers installed by an earlier implicit basicConfig()
    logging.basicConfig(level=log_level, handlers=handlers, force=True)
