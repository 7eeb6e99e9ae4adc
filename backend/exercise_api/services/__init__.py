# Services package init
"""
Exercise API Backend: Services Layer
=====================================

Service Inventory:
    - ExerciseStore (abstract): Record Store interface
    - SqlAlchemyExerciseStore: Record Store over async SQLAlchemy
    - ExerciseService: validation + store calls + outcome rules per operation
"""
