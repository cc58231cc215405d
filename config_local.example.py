# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for everything else. This file supports only the switches below.
"""

# Example: run only the glance refresher (no console)
# CONSOLE_ENABLED = False

# Example: disable the background glance refresher
# GLANCE_ENABLED = False
