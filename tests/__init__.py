"""
Test suite for Falcon Admin Rotation tool.

This package contains tests covering:
- Complexity policy, random generation and token synthesis
- Per-host rotation pipeline with test-double collaborators
- FalconAPI device lookup and Real Time Response with mocked responses
- Falcon-backed collaborators and the collaborator factory
- Configuration loading, credentials precedence and CLI output strategies
"""
