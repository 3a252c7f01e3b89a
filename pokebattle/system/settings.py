from __future__ import annotations
import json, os, random
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, List, Optional
from pokebattle.core.logging import logger

SETTINGS_FILENAME = ".pokebattle_settings.json"
LOG_LEVELS = {"DEBUG","INFO","WARN","ERROR"}

@dataclass
class SettingsData:
    log_level: str = "WARN"            # DEBUG / INFO / WARN / ERROR
    debug: bool = False                # Verbose battle prints
    level: int = 50                    # Level every combatant is built at
    min_base_stat_total: int = 400     # Roster filter for selectable species
    seed: Optional[int] = None         # Fixed RNG seed for reproducible battles
    roster_path: Optional[str] = None  # Alternate roster JSON

    def normalize(self):
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            self.log_level = "WARN"
        try:
            self.level = max(1, min(100, int(self.level)))
        except (TypeError, ValueError):
            self.level = 50
        try:
            self.min_base_stat_total = max(0, int(self.min_base_stat_total))
        except (TypeError, ValueError):
            self.min_base_stat_total = 400
        if self.seed is not None and not isinstance(self.seed, int):
            self.seed = None

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def apply(self):
        """Push logging preferences into the shared logger."""
        logger.set_level("DEBUG" if self.data.debug else self.data.log_level)
        self._notify()

    def make_rng(self) -> random.Random:
        return random.Random(self.data.seed)

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def _notify(self):
        for fn in self._listeners:
            fn(self.data)
