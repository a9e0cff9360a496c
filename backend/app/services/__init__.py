"""Services Layer — pagination engine, cached lookup and async dispatch.

Invariants:
    - Services depend on core/ Protocols, never on a concrete store
    - Every async variant goes through services/dispatch.py

Design Decisions:
    - PlayerService is the single entry point used by the API layer
"""
