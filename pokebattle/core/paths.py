"""
Centralized path helpers (flat layout).
"""
from __future__ import annotations
from pathlib import Path

# This file lives at pokebattle/core/paths.py
ROOT = Path(__file__).resolve().parents[2]   # project root (one up from 'pokebattle')
ASSETS = ROOT / "assets"
ROSTER = ASSETS / "roster"
ROSTER_FILE = ROSTER / "species.json"
