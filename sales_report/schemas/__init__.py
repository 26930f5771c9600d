"""Pydantic Schemas — request/response shapes for the HTTP and command boundaries.

Invariants:
    - Schemas check SHAPE only (types, presence); field rules live in core/validate_*.py
      so every caller gets the same messages
    - to_draft()/to_patch() hand core dataclasses to the services

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - No max_length/min_length here: a too-long name must fail with the core
      InvalidFieldError message, not a generic pydantic error
"""
