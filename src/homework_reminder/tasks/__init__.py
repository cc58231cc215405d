"""
Task subsystem.

Components:
- task_models.py: TaskRecord + JSON wire format + display helpers
- task_store.py: whole-collection load/save over the shared namespace
- date_detection.py: best-effort date detection in free text
- reminders.py: reminder requests for the host notification subsystem
"""
