# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "FORMREC_APP_NAME": "App display name (default: form-records).",
    "FORMREC_LOG_LEVEL": "Console logging level (default: INFO).",
    "FORMREC_LOG_DIR": "Directory for form_records.log (default: FORMREC_DATA_DIR).",
    # Records
    "FORMREC_RECORD_KIND": "Record shape: task | profile (default: task).",
    "FORMREC_DATA_DIR": "Local data directory (default: .local/form_records).",
    "FORMREC_RECORDS_PATH": "JSON file with the records (default: <data_dir>/tasks.json).",
    # Connectors
    "FORMREC_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
}
