"""
Exercise API Backend: Application Package Initializer
======================================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Validation + Rules)     │  ← outcome per operation
    ├─────────────────────────────────────┤
    │       Record Store (Persistence)    │  ← ExerciseStore implementations
    ├─────────────────────────────────────┤
    │     Database (Async SQLAlchemy)     │  ← engine + sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
