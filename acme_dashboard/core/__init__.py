"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (callers pass in "today")

Design Decisions:
    - Functional core separated from imperative shell: form validation and
      outcome selection are plain functions, the shell does SQL and HTTP
"""
