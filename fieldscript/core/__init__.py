"""Core Layer: pure domain logic, no IO, no collaborator calls.

Invariants:
    - No module in core/ imports from services/, schemas/, or infrastructure/
    - Functions here never call back into the document or field collaborators

Design Decisions:
    - Functional core separated from the dispatching shell in services/
"""
