"""Services Layer — imperative shell orchestrating core logic around IO.

Invariants:
    - Services take their IO collaborators as arguments (store, cache, verifier, db)
    - Pure decisions live in core/; services only sequence calls
"""
