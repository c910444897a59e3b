#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the calendar manager.

The project structure:
    ROOT/
    ├── calendar_manager/   # Package source
    │   └── migrations/     # Alembic environment and revisions
    ├── data/               # SQLite database
    └── logs/               # Application logs
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path

# ----- Package directory -----
PACKAGE_DIR: Path = Path(__file__).resolve().parent.parent
ROOT: Path = PACKAGE_DIR.parent

# --- Database ---
ALEMBIC_DIR = PACKAGE_DIR / "migrations"
DATA_DIR = ROOT / "data"
DB_PATH = DATA_DIR / "calendar.db"
DB_URL = f"sqlite:///{DB_PATH}"

# ---- Logs ----
LOG_DIR = ROOT / "logs"
