"""
================================================================================
Structured Logger
================================================================================

Correlated, leveled event log shared by every interaction in a test run.

Features:
    - Ordered, queryable history of LogEntry records
    - Correlation by test name and step name
    - Live mirror of each stored entry to the loguru console sink
    - JSON export/import for post-mortem archival

The logger is an explicitly constructed object. Create one per session,
inject it into page objects and interaction helpers, clear it between test
cases and export it at teardown.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from loguru import logger


class LogLevel(IntEnum):
    """Severity levels in ascending order."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3

    @classmethod
    def parse(cls, value: Union["LogLevel", str, int]) -> "LogLevel":
        """
        Resolve a level from an enum member, a name or an integer.

        Raises:
            ValueError: If the value does not name a level
        """
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            if name == "WARNING":
                name = "WARN"
            try:
                return cls[name]
            except KeyError:
                raise ValueError(f"Unknown log level: {value!r}") from None
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        raise ValueError(f"Unknown log level: {value!r}")


# loguru spells WARN as WARNING
_LOGURU_LEVELS: Dict[LogLevel, str] = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARN: "WARNING",
    LogLevel.ERROR: "ERROR",
}


@dataclass(frozen=True)
class LogEntry:
    """
    A single recorded event.

    Attributes:
        timestamp: ISO-8601 UTC timestamp
        level: Severity
        message: Human-readable message
        data: Optional structured payload
        test_name: Correlation id of the test that produced the entry
        step_name: Optional step label
    """

    timestamp: str
    level: LogLevel
    message: str
    data: Optional[Dict[str, Any]] = None
    test_name: Optional[str] = None
    step_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the level's name so exports are self-describing."""
        return {
            "timestamp": self.timestamp,
            "level": self.level.name,
            "message": self.message,
            "data": self.data,
            "test_name": self.test_name,
            "step_name": self.step_name,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "LogEntry":
        """Rebuild an entry from its exported form."""
        return cls(
            timestamp=raw["timestamp"],
            level=LogLevel.parse(raw["level"]),
            message=raw["message"],
            data=raw.get("data"),
            test_name=raw.get("test_name"),
            step_name=raw.get("step_name"),
        )


def _render_payload(data: Mapping[str, Any]) -> str:
    try:
        return json.dumps(data, indent=2, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(data)


class StructuredLogger:
    """
    Thread-safe structured event log with a live loguru mirror.

    Usage:
        >>> log = StructuredLogger(level="INFO")
        >>> log.info("Clicked Login", {"selector": "#login-button"}, "test_login", "Element Click")
        >>> [e.message for e in log.query("test_login")]
        ['Clicked Login']
        >>> archive = log.export()
    """

    def __init__(self, level: Union[LogLevel, str, int] = LogLevel.INFO, sink: Any = None):
        """
        Initialize the logger.

        Args:
            level: Minimum severity that is stored and mirrored
            sink: loguru-compatible logger used as the live text sink
        """
        self._level = LogLevel.parse(level)
        self._entries: List[LogEntry] = []
        self._lock = threading.Lock()
        self._sink = sink if sink is not None else logger

    # =========================================================================
    # Level
    # =========================================================================

    @property
    def level(self) -> LogLevel:
        """Current minimum severity."""
        return self._level

    def set_level(self, level: Union[LogLevel, str, int]) -> None:
        """Change the minimum severity for future records only."""
        parsed = LogLevel.parse(level)
        with self._lock:
            self._level = parsed

    # =========================================================================
    # Recording
    # =========================================================================

    def record(
        self,
        level: Union[LogLevel, str, int],
        message: str,
        data: Optional[Mapping[str, Any]] = None,
        test_name: Optional[str] = None,
        step_name: Optional[str] = None,
    ) -> Optional[LogEntry]:
        """
        Append an entry if its level passes the current threshold.

        Returns:
            The stored entry, or None when it was filtered out
        """
        level = LogLevel.parse(level)
        with self._lock:
            if level < self._level:
                return None
            entry = LogEntry(
                timestamp=datetime.now(timezone.utc).isoformat(),
                level=level,
                message=message,
                data=dict(data) if data is not None else None,
                test_name=test_name or None,
                step_name=step_name or None,
            )
            self._entries.append(entry)
            self._emit(entry)
        return entry

    def debug(self, message: str, data=None, test_name=None, step_name=None) -> Optional[LogEntry]:
        return self.record(LogLevel.DEBUG, message, data, test_name, step_name)

    def info(self, message: str, data=None, test_name=None, step_name=None) -> Optional[LogEntry]:
        return self.record(LogLevel.INFO, message, data, test_name, step_name)

    def warn(self, message: str, data=None, test_name=None, step_name=None) -> Optional[LogEntry]:
        return self.record(LogLevel.WARN, message, data, test_name, step_name)

    def error(self, message: str, data=None, test_name=None, step_name=None) -> Optional[LogEntry]:
        return self.record(LogLevel.ERROR, message, data, test_name, step_name)

    def _emit(self, entry: LogEntry) -> None:
        """Mirror one entry to the live sink."""
        prefix = f"[{entry.test_name}]" if entry.test_name else ""
        step = f" - {entry.step_name}" if entry.step_name else ""
        text = f"{prefix}{step}: {entry.message}" if (prefix or step) else entry.message
        if entry.data:
            text = f"{text}\nData: {_render_payload(entry.data)}"
        self._sink.opt(depth=2).log(_LOGURU_LEVELS[entry.level], text)

    # =========================================================================
    # History
    # =========================================================================

    def query(self, test_name: Optional[str] = None) -> List[LogEntry]:
        """
        Snapshot of stored entries in insertion order.

        Args:
            test_name: Only return entries correlated with this test
        """
        with self._lock:
            entries = list(self._entries)
        if test_name is None:
            return entries
        return [entry for entry in entries if entry.test_name == test_name]

    def clear(self) -> None:
        """Forget every stored entry. The level is kept."""
        with self._lock:
            self._entries = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # =========================================================================
    # Export
    # =========================================================================

    def export(self, test_name: Optional[str] = None) -> str:
        """Serialize stored entries as a JSON array in insertion order."""
        return json.dumps(
            [entry.to_dict() for entry in self.query(test_name)],
            indent=2,
            default=str,
            ensure_ascii=False,
        )

    def export_to(self, path: Union[str, Path], test_name: Optional[str] = None) -> Path:
        """Write the export to a file and return its path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.export(test_name), encoding="utf-8")
        return path

    @staticmethod
    def load_export(text: str) -> List[LogEntry]:
        """Parse an export produced by `export()`."""
        return [LogEntry.from_dict(raw) for raw in json.loads(text)]


__all__ = [
    "LogLevel",
    "LogEntry",
    "StructuredLogger",
]
