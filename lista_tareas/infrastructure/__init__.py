"""Infrastructure Layer — connection pool and logging setup.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Availability failures mapped to typed errors (core/errors.py)
"""
