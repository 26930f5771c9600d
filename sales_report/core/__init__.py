"""Core Layer — pure record rules and contracts, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Validators are pure and deterministic: same input, same result, no shared state

Design Decisions:
    - Functional core separated from imperative shell: storage and services
      orchestrate IO around these functions
"""
