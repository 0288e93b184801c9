"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus)
- task_store.py: JSON file storage (full load / full save)
- task_api.py: add / update / set status / delete / filtered iteration
"""
