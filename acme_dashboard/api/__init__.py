"""API Layer — FastAPI routers, dependencies and the HTTP boundary adapter.

Invariants:
    - Routes never contain business logic (delegate to services/)
    - Action results become HTTP responses only in action_responses.py
"""
