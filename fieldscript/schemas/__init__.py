"""Pydantic Schemas: raw interaction input and field patch output.

Invariants:
    - Schemas validate at the engine boundary only (incoming interactions, outgoing patches)
    - Domain types from core/ used for enum fields
"""
