"""Services Layer — case lifecycle and voting engine orchestrating store IO.

Invariants:
    - Services own no persistence; stores are injected at construction
    - Every public method authorizes the principal before touching a store

Design Decisions:
    - One service per component for locality: lifecycle and voting never call each other
"""
