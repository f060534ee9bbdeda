"""Shared utility modules for falcon_admin_rotation."""

__all__ = [
    'config',
    'constants',
    'datetime_utils',
    'exceptions',
    'logger',
]
