"""Infrastructure Layer — storage implementations, DB sessions, logging.

Invariants:
    - Everything that touches IO or process-wide state lives here, never in core/
    - Storage implementations satisfy core/repository_protocols.RecordStorage
"""
