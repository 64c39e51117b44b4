"""Core Layer - pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Composition functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the same core runs for
      live preview and production render
"""
