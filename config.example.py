# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "DEMAND_APP_NAME": "App display name (default: demand-timeline).",
    "DEMAND_LOG_LEVEL": "Console logging level (default: INFO). The file log is always DEBUG.",
    # Front-end
    "DEMAND_CONSOLE_ENABLED": "Interactive console (true) or watch mode that re-prints the day (false).",
    "DEMAND_SEED_DEMO": "Insert the sample day when the task store is empty (default: true).",
    # Day window
    "DEMAND_DAY_START": "Window start, HH:MM (default: 08:00).",
    "DEMAND_DAY_END": "Window end, HH:MM (default: 20:00).",
    "DEMAND_TICK_MINUTES": "Hour-scale label step in minutes (default: 30).",
    "DEMAND_REFRESH_SECONDS": "Watch-mode refresh interval in seconds (default: 10).",
    # Paths (gitignored)
    "DEMAND_DATA_DIR": "Local data directory for logs and the database (default: .local/demand).",
    "DEMAND_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
}
