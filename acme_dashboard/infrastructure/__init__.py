"""Infrastructure Layer — database, cache, identity and logging adapters.

Invariants:
    - Implements the Protocols declared in core/repository_protocols.py
    - Translates library exceptions into core/errors.py types at this boundary
"""
