"""Type colours & abbreviations for the terminal front end.

Provides:
  TYPE_COLORS_HEX: type -> hex colour (#RRGGBB)
  TYPE_ABBREVIATIONS: type -> 3-letter abbreviation
  rich markup helpers for type tags and status badges.
"""
from __future__ import annotations
from typing import Dict, Iterable

from pokebattle.battle.models import Status

TYPE_COLORS_HEX: Dict[str, str] = {
    "normal": "#9ca3af",
    "fire": "#f97316",
    "water": "#3b82f6",
    "electric": "#facc15",
    "grass": "#22c55e",
    "ice": "#67e8f9",
    "fighting": "#b91c1c",
    "poison": "#a855f7",
    "ground": "#ca8a04",
    "flying": "#818cf8",
    "psychic": "#ec4899",
    "bug": "#84cc16",
    "rock": "#a16207",
    "ghost": "#7e22ce",
    "dragon": "#4f46e5",
    "dark": "#374151",
    "steel": "#6b7280",
    "fairy": "#f9a8d4",
}

TYPE_ABBREVIATIONS: Dict[str, str] = {
    "normal": "NRM", "fire": "FIR", "water": "WTR", "electric": "ELE", "grass": "GRS",
    "ice": "ICE", "fighting": "FGT", "poison": "PSN", "ground": "GRD", "flying": "FLY",
    "psychic": "PSY", "bug": "BUG", "rock": "RCK", "ghost": "GHO", "dragon": "DRA",
    "dark": "DRK", "steel": "STL", "fairy": "FAI",
}

STATUS_BADGES: Dict[Status, str] = {
    Status.BURN: "BRN",
    Status.PARALYZE: "PAR",
    Status.SLEEP: "SLP",
    Status.POISON: "PSN",
    Status.FREEZE: "FRZ",
}


def type_abbreviation(type_name: str) -> str:
    return TYPE_ABBREVIATIONS.get(type_name.lower(), type_name[:3].upper())


def type_tag(type_name: str, text: str | None = None) -> str:
    label = text if text is not None else type_name
    hex_color = TYPE_COLORS_HEX.get(type_name.lower())
    if not hex_color:
        return label
    return f"[bold white on {hex_color}] {label} [/]"


def format_types(types: Iterable[str]) -> str:
    return " ".join(type_tag(t) for t in types)


def compact_types(types: Iterable[str]) -> str:
    return " ".join(type_tag(t, type_abbreviation(t)) for t in types)


def status_badge(status: Status) -> str:
    badge = STATUS_BADGES.get(status)
    return f" [bold white on #f97316] {badge} [/]" if badge else ""


def hp_color(current: int, max_hp: int) -> str:
    pct = current / max_hp if max_hp > 0 else 0
    if pct > 0.5:
        return "green"
    if pct > 0.2:
        return "yellow"
    return "red"

__all__ = [
    "TYPE_COLORS_HEX", "TYPE_ABBREVIATIONS", "type_abbreviation", "type_tag",
    "format_types", "compact_types", "status_badge", "hp_color",
]
