"""
FalconAPI module tests.

Covers device lookup by hostname, online state, device details and the RTR
session lifecycle. Sessions must be deleted even when a command fails or
times out.
"""
