"""
Shared pytest fixtures and configuration for all tests.

This module provides fixtures for:
- Temporary configuration files
- Test doubles for the reachability, inventory and identity collaborators
- Mock FalconPy APIHarnessV2 clients
- Rich consoles writing to in-memory buffers
"""

import shutil
import tempfile
from io import StringIO
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
import yaml
from rich.console import Console

from falcon_admin_rotation.cli.context import CliContext
from falcon_admin_rotation.factories.adapters.collaborator_adapter import (
    IdentityService,
    InventorySource,
    ReachabilityProbe,
)
from falcon_admin_rotation.utils.exceptions import ApiError


class FakeProbe(ReachabilityProbe):
    """Reachability probe reporting every host reachable except those listed."""

    def __init__(self, unreachable=(), raise_for=()):
        self.unreachable = set(unreachable)
        self.raise_for = set(raise_for)
        self.calls = []

    def probe(self, host):
        self.calls.append(host)
        if host in self.raise_for:
            raise ApiError(f"probe failed for {host}")
        return host not in self.unreachable


class FakeInventory(InventorySource):
    """Inventory source backed by dictionaries."""

    def __init__(self, serials=None, adapters=None, fail_for=()):
        self.serials = serials or {}
        self.adapters = adapters or {}
        self.fail_for = set(fail_for)
        self.calls = []

    def fetch_serial(self, host):
        self.calls.append(('serial', host))
        if host in self.fail_for:
            raise ConnectionError(f"inventory query failed on {host}")
        return self.serials.get(host, '')

    def fetch_adapters(self, host):
        self.calls.append(('adapters', host))
        if host in self.fail_for:
            raise ConnectionError(f"inventory query failed on {host}")
        return self.adapters.get(host, [])


class FakeIdentity(IdentityService):
    """Identity service recording every password change."""

    def __init__(self, raise_for=(), reject=(), error=None):
        self.raise_for = set(raise_for)
        self.reject = set(reject)
        self.error = error
        self.calls = []

    def set_password(self, host, account, password):
        self.calls.append((host, account, password))
        if host in self.raise_for:
            raise self.error or RuntimeError(f"access denied on {host}")
        return host not in self.reject


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test."""
    temp_path = Path(tempfile.mkdtemp(prefix="rotation_test_"))
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def minimal_config_data(temp_dir: Path) -> Dict[str, Any]:
    """Minimal configuration data for testing."""
    return {
        "falcon_credentials": {
            "prefix": "FALCON_",
        },
        "rotation": {
            "account": "Administrator",
            "max_generation_attempts": 100
        },
        "reachability": {
            "type": "falcon"
        },
        "rtr": {
            "timeout": 5,
            "poll_interval": 0
        },
        "logging": {
            "file": str(temp_dir / "logs" / "test.log"),
            "level": "DEBUG"
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, minimal_config_data: Dict[str, Any]) -> Path:
    """Write the minimal configuration to a YAML file."""
    path = temp_dir / "config.yaml"
    with open(path, 'w') as f:
        yaml.dump(minimal_config_data, f)
    return path


@pytest.fixture
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def fake_inventory() -> FakeInventory:
    return FakeInventory()


@pytest.fixture
def fake_identity() -> FakeIdentity:
    return FakeIdentity()


@pytest.fixture
def output_buffer() -> StringIO:
    return StringIO()


@pytest.fixture
def mock_ctx(output_buffer: StringIO) -> CliContext:
    """Create CLI context writing to an in-memory buffer."""
    console = Console(file=output_buffer, force_terminal=False, width=200)
    return CliContext(console=console, verbose=False, json_output_mode=False, config={})
