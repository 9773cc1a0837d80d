"""Domain entity describing a row change reported by the hosted database."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

CHANGE_INSERT = "INSERT"
CHANGE_UPDATE = "UPDATE"
CHANGE_DELETE = "DELETE"


@dataclass(frozen=True)
class DatabaseChange:
    """A single INSERT/UPDATE/DELETE on a public table."""

    table: str
    event_type: str
    record: dict[str, Any] = field(default_factory=dict)
    old_record: dict[str, Any] = field(default_factory=dict)


__all__ = ["DatabaseChange", "CHANGE_INSERT", "CHANGE_UPDATE", "CHANGE_DELETE"]
