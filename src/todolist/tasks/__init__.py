"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskFilter, TaskStatus) + record format
- errors.py: user-recoverable errors (ValidationError, EmptyCollectionError)
- task_store.py: persistence adapter (whole collection under one key)
- task_engine.py: in-memory collection, mutations, filtering, derived status
- task_view.py: row view-model and plain-text rendering for the console
"""
