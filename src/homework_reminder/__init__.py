"""
Homework reminder.

Three surfaces share one task list through a key-value namespace:
- surfaces/main_list.py: the main list (create / toggle / delete)
- surfaces/glance.py: read-only "most urgent assignment" projection
- surfaces/share_ingest.py: turns shared text into a new task

tasks/task_store.py owns the stored collection (whole-collection replace, last writer wins).
"""

__version__ = "0.1.0"
