import yaml

from falcon_admin_rotation.utils.constants import (
    DEFAULT_ACCOUNT,
    DEFAULT_MAX_GENERATION_ATTEMPTS,
    DEFAULT_PROBE_PORT,
    DEFAULT_PROBE_TIMEOUT_SECONDS,
    DEFAULT_RTR_POLL_INTERVAL_SECONDS,
    DEFAULT_RTR_TIMEOUT_SECONDS,
)


def _load_config_defaults(config):
    # Ensure we have a dict to work with
    if not isinstance(config, dict):
        config = {}

    # Falcon credentials placeholder defaults (keeps keys present)
    config.setdefault('falcon_credentials', {})
    fc = config['falcon_credentials']
    fc['client_id'] = fc.get('client_id', '')
    fc['client_secret'] = fc.get('client_secret', '')
    fc['base_url'] = fc.get('base_url', '')
    fc['prefix'] = fc.get('prefix', 'FALCON_')

    # Rotation defaults
    config.setdefault('rotation', {})
    rot = config['rotation']
    rot['account'] = rot.get('account', DEFAULT_ACCOUNT)
    rot['max_generation_attempts'] = rot.get('max_generation_attempts', DEFAULT_MAX_GENERATION_ATTEMPTS)
    rot['revalidate_token_password'] = rot.get('revalidate_token_password', False)

    # Reachability probe defaults
    config.setdefault('reachability', {})
    reach = config['reachability']
    reach['type'] = reach.get('type', 'falcon')
    reach['port'] = reach.get('port', DEFAULT_PROBE_PORT)
    reach['timeout'] = reach.get('timeout', DEFAULT_PROBE_TIMEOUT_SECONDS)

    # Real Time Response defaults
    config.setdefault('rtr', {})
    rtr = config['rtr']
    rtr['timeout'] = rtr.get('timeout', DEFAULT_RTR_TIMEOUT_SECONDS)
    rtr['poll_interval'] = rtr.get('poll_interval', DEFAULT_RTR_POLL_INTERVAL_SECONDS)

    # Logging defaults
    config.setdefault('logging', {})
    log = config['logging']
    log['file'] = log.get('file', 'logs/app.log')
    log['level'] = log.get('level', 'INFO')

    return config


def read_config_from_yaml(config_file="config/config.yaml"):
    try:
        with open(config_file, 'r') as file:
            config = yaml.safe_load(file) or {}
    except FileNotFoundError:
        # Logging is not configured yet; a missing file simply means defaults
        config = {}
    except (OSError, yaml.YAMLError) as e:
        print(f"Error reading App configuration from {config_file}: {e}")
        config = {}
    config = _load_config_defaults(config)
    return config
