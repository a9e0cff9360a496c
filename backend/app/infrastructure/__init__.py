"""Infrastructure Layer — database access, worker pools and logging.

Invariants:
    - Infrastructure may import core/ types and errors, never services/ or api/
    - Every external failure is mapped to a core error type at this boundary

Design Decisions:
    - Adapters implement core Protocols structurally (no inheritance)
"""
