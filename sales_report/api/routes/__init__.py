"""Route Modules — one file per record kind plus commands and health.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to services)
    - Fixed paths (/search, /validate) declared before /{id} so they are matched first

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
