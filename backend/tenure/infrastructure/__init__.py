"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Implements the boundary protocols declared in core/repository_protocols.py
    - All SQLAlchemy faults surface as core.errors.DatabaseError

Design Decisions:
    - Stores wrap one AsyncSession each: the caller owns the session lifecycle
"""
