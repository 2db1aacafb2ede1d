# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Keep the service account key and .env out of version control.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODODOS_APP_NAME": "App display name (default: tododos).",
    "TODODOS_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    "TODODOS_DATA_DIR": "Local data directory for tododos.log (default: .local/tododos).",
    # Google Sheets
    "TODODOS_SPREADSHEET_ID": "Spreadsheet key from the sheet URL (empty => offline, save/reload disabled).",
    "TODODOS_CREDENTIALS_PATH": "Service account JSON key (default: credentials.json).",
    "TODODOS_WORKSHEET_INDEX": "Zero-based worksheet tab holding the tasks (default: 0).",
    # Console
    "TODODOS_CLEAR_SCREEN": "Clear the terminal before each redraw (true/false, default: true).",
}
