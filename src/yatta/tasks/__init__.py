"""
Task subsystem.

Components:
- task_models.py: the Task entity and its JSON-equivalent record
- due_time.py: due date/clock parsing and normalization
- task_store.py: JSON file persistence of the whole collection
- task_manager.py: lock-guarded CRUD + per-tick due-task scan
- task_scheduler.py: async scanner loop and notification dispatcher
"""
