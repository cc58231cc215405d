# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "HOMEWORK_APP_NAME": "App display name (default: homework).",
    "HOMEWORK_LOG_LEVEL": "Console logging level (default: INFO). The file log is always DEBUG.",
    # Surfaces
    "HOMEWORK_CONSOLE_ENABLED": "Run the console main list / share REPL (true/false).",
    "HOMEWORK_GLANCE_ENABLED": "Run the background glance refresher (true/false).",
    # Shared namespace
    "HOMEWORK_DATA_DIR": "Local data directory (default: .local/homework).",
    "HOMEWORK_SHARED_DB_PATH": "Shared namespace SQLite file (default: <data_dir>/shared_defaults.sqlite3).",
    "HOMEWORK_APP_GROUP": "Shared namespace (app group) name (default: group.homework.reminder).",
    "HOMEWORK_TASKS_KEY": "Key holding the task collection (default: SavedTasks).",
    # Timing
    "HOMEWORK_GLANCE_REFRESH_MINUTES": "Glance refresh interval in minutes (default: 10).",
    "HOMEWORK_REMINDER_LEAD_MINUTES": "Reminder fires this many minutes before the due date (default: 60).",
    "HOMEWORK_INGEST_FALLBACK_HOURS": "Shared items without a date are due this many hours later (default: 24).",
}
