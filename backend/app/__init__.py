"""Chrome Layout Package - header/footer layout configuration and navigation composition.

Invariants:
    - Package root contains no executable code (no import side effects)
"""
