"""Infrastructure Layer - database access, protocol adapters, logging setup.

Invariants:
    - SQLAlchemy errors never escape an adapter unmapped (DatabaseError)
"""
