"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain values from core/ are converted here, never ORM rows

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
