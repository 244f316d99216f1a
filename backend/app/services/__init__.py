"""Services Layer - aggregate operations orchestrating stores around pure core rules.

Invariants:
    - One service per aggregate; services never call each other
    - Services depend on core protocols only, never on SQLAlchemy or FastAPI
"""
