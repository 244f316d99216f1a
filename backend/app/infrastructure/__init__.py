"""Infrastructure Layer - database access, store implementations and cross-cutting concerns.

Invariants:
    - Implements the core/repository_protocols contracts; services never import SQLAlchemy
    - All SQLAlchemy failures surface as core DatabaseError

Design Decisions:
    - One module per store so each aggregate's mapping lives next to its queries
"""
