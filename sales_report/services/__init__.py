"""Services Layer — entity services and the named command dispatch.

Invariants:
    - One service per record kind, each composing core validators with a RecordStorage
    - Validation always runs before storage is touched: an invalid payload persists nothing
    - Command dispatch uses an explicit dict mapping (no auto-discovery)
"""
