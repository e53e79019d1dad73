"""Services Layer: action runner, validation, calculation, and dispatch.

Invariants:
    - Every stage receives the EventRecord as an explicit argument
    - Dispatch routing uses explicit name checks (no getattr lookup)

Design Decisions:
    - One module per pipeline stage for locality
"""
