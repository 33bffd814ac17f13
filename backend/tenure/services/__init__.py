"""Services Layer — promotion orchestration, employee locks, directory reads.

Invariants:
    - Services sequence IO around pure core functions; no business rule lives here
    - Store handles are injected, never constructed from globals

Design Decisions:
    - One file per use case for locality
"""
