# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "VIBE_APP_NAME": "Widget display name (default: Vibe To-Do).",
    "VIBE_LOG_LEVEL": "Console logging level (default: INFO).",
    # Tasks
    "VIBE_TASKS_PATH": "Task list JSON file (default: ~/.vibe_tasks.json).",
    "VIBE_CHECK_INTERVAL_SECONDS": "Deadline check period in seconds (default: 60, min 1).",
    "VIBE_REMINDER_MINUTES": "Reminder window before a deadline in minutes (default: 10).",
    # Connectors
    "VIBE_CONSOLE_ENABLED": "Run the interactive console (true/false).",
    "VIBE_CONSOLE_NOTIFY": "Print notifications to the console; false logs them only.",
    "VIBE_MATRIX_ENABLED": "Also post notifications to a Matrix room (true/false).",
    # Matrix
    "VIBE_MATRIX_HOMESERVER": "Matrix homeserver URL.",
    "VIBE_MATRIX_USER_ID": "Matrix user ID used to post notifications.",
    "VIBE_MATRIX_PASSWORD": "Password for first login (session stored locally).",
    "VIBE_MATRIX_ROOM_ID": "Room that receives deadline notifications.",
    # Paths (gitignored)
    "VIBE_DATA_DIR": "Local data directory for logs and Matrix session (default: .local/vibe).",
    "VIBE_MATRIX_STORE_PATH": "Matrix session/E2EE store path (default: <data_dir>/matrix_store).",
}
