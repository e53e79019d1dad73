"""fieldscript: field-scripting event-dispatch engine.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: callers import from the layer modules directly
"""
