"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, Priority, Category, points_for)
- task_store.py: in-memory owner of the task collection and its status state machine
- task_api.py: small high-level helpers (sample quests, title suggestions, relative times)
"""
