"""
Rotation core tests.

The pipeline tests must keep asserting that exactly one outcome is produced
per input host, whichever step fails.
"""
