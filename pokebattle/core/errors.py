"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class BattleError(Exception):
    pass

class DataLoadError(BattleError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class ValidationError(BattleError):
    pass

class InvalidSwitchError(BattleError):
    def __init__(self, index: int, detail: str):
        super().__init__(f"Cannot switch to slot {index}: {detail}")
        self.index = index
        self.detail = detail
