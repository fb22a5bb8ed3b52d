# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Remote API
    "TODO_API_BASE_URL": "Todo API base URL (default: https://dummyjson.com).",
    "TODO_HTTP_TIMEOUT_SECONDS": "Per-request timeout in seconds (default: 10; 0 disables it).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory (default: .local/todo). Holds todo.log too.",
    "TODO_STORAGE_DB_PATH": "Key-value SQLite file (default: <data_dir>/storage.sqlite3).",
    "TODO_STORAGE_KEY": "Key holding the JSON todo list (default: todos).",
    # Console view
    "TODO_NIGHT_MODE": "Start with night mode on (true/false, default: false). Not persisted.",
    "TODO_COLOR": "ANSI styling when stdout is a TTY (true/false, default: true).",
}
