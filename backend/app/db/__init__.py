"""Database Infrastructure — session factory and SQLAlchemy Base.

Invariants:
    - Single engine per process (owned by DatabaseSessionManager)
    - Sessions are synchronous: every caller already runs on a worker thread
"""
