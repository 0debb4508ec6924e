"""
relaynode Test Suite.

This package contains:
- unit/: Unit tests (CRUD adapter stubbed with AsyncMock)
- integration/: Nodes over the in-memory CRUD adapter
"""
