"""
RideRelay Backend: Application Package
========================================

Layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │   Routes (auth, services, bookings) │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (auth guard, CRUD)       │  ← rules, sorting, ownership
    ├─────────────────────────────────────┤
    │   Models & Schemas                  │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database                          │  ← one injected async engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
