"""Core Layer — pure temporal history logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (the clock is passed in)

Design Decisions:
    - Functional core separated from imperative shell: validators and the
      transition engine only describe writes, the shell performs them
"""
