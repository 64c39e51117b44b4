"""Services Layer - async orchestration around the pure core.

Invariants:
    - Services reach storage only through core.repository_protocols types
    - Read failures degrade to defaults; write failures are returned, not raised
"""
