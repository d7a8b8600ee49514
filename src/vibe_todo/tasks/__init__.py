"""
Task subsystem.

Components:
- task_models.py: TaskRecord + legacy migration and JSON (de)serialization
- task_collection.py: ordered in-memory list with stable task ids
- task_store.py: JSON file storage (atomic save, explicit load/save results)
- task_scheduler.py: periodic deadline scan (due + reminder notifications)
- task_presenter.py: display order and countdown/deadline strings
- task_commands.py: add / quick add / toggle / remove
- task_api.py: persist + refresh helpers shared by the above
"""
