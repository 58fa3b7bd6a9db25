"""Services Layer — storage operations behind the routes.

Invariants:
    - One statement per operation; connections never held across calls
"""
