"""Core Layer - pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Rules raise typed errors from core/errors.py; they never log and continue

Design Decisions:
    - Functional core separated from imperative shell: aggregates and rules here,
      load/save orchestration in services/
"""
