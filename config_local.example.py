# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for secrets. This file should contain only safe overrides.
"""

# Example: post deadline notifications to Matrix locally
# MATRIX_ENABLED = True

# Example: headless mode (deadline checks + notifications only)
# CONSOLE_ENABLED = False

# Example: keep the task list somewhere else
# TASKS_PATH = "~/Documents/vibe_tasks.json"
