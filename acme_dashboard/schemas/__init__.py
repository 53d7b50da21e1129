"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (sign-in input, page data responses)
    - Invoice form input is NOT a schema: it is validated by core/enforce_invoice_form.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
