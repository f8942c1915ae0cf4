#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main` and
:mod:`api.server`).  This module is a thin, import-safe leaf: it never
imports from other project packages.
"""

# ── Input / output file naming ───────────────────────────────────────────────
SUBMISSION_SUFFIX: str = ".out.txt"
INSIGHTS_SUFFIX: str = ".insights.txt"
CARS_CSV_SUFFIX: str = ".cars.csv"

# ── Logging defaults ─────────────────────────────────────────────────────────
DEFAULT_LOG_LEVEL: str = "WARNING"
LOG_FILE: str = "judge.log"
LOG_MAX_BYTES: int = 1_000_000
LOG_BACKUP_COUNT: int = 2

# ── Terminal report highlight ────────────────────────────────────────────────
HIGHLIGHT_ANSI: str = "\u001b[33m"
RESET_ANSI: str = "\u001b[0m"

# ── REST API defaults ────────────────────────────────────────────────────────
API_HOST: str = "0.0.0.0"
API_PORT: int = 8000
