"""Infrastructure Layer — database session management, SQL stores, auth, observability.

Invariants:
    - Infrastructure implements the Protocols in core/repository_protocols.py
    - No business rules live here; stores only translate between rows and records
"""
