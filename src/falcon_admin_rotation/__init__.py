"""
Falcon Admin Rotation - local account password rotation for CrowdStrike Falcon fleets.

A unique, complexity-compliant password is derived per host, either randomly
or from a static phrase plus a per-host token, applied through Falcon Real
Time Response, and reported as one outcome record per host.
"""

import importlib.metadata
import tomllib
from pathlib import Path

__license__ = "MIT"

_DISTRIBUTION = "falcon-admin-rotation"


def _version_from_source_tree() -> str:
    """Version from pyproject.toml when running from a checkout that is not installed."""
    pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if not pyproject_path.exists():
        return "unknown"
    with open(pyproject_path, "rb") as f:
        return tomllib.load(f).get("project", {}).get("version", "unknown")


try:
    __version__ = importlib.metadata.version(_DISTRIBUTION)
except importlib.metadata.PackageNotFoundError:
    __version__ = _version_from_source_tree()

__all__ = ['__version__', '__license__']
