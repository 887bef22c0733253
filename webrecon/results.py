"""Thread-safe collection of scan findings."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator


@dataclass
class ScanResult:
    """A single finding produced by a scanner."""

    type: str
    category: str
    title: str
    description: str
    data: Any = None
    timestamp: datetime = field(default_factory=datetime.now)


class Results:
    """Collects scan results from any number of threads."""

    def __init__(self) -> None:
        self._items: list[ScanResult] = []
        self._lock = threading.Lock()

    @property
    def items(self) -> list[ScanResult]:
        """A snapshot of all results in the order they were added."""
        with self._lock:
            return list(self._items)

    def add(
        self,
        result_type: str,
        category: str,
        title: str,
        description: str,
        data: Any = None,
    ) -> None:
        """Record a new result stamped with the current time."""
        result = ScanResult(result_type, category, title, description, data)
        with self._lock:
            self._items.append(result)

    def get_by_type(self, result_type: str) -> list[ScanResult]:
        """Return every result of the given type."""
        with self._lock:
            return [item for item in self._items if item.type == result_type]

    def get_by_category(self, category: str) -> list[ScanResult]:
        """Return every result in the given category."""
        with self._lock:
            return [item for item in self._items if item.category == category]

    def count(self) -> int:
        """Return the number of results collected so far."""
        with self._lock:
            return len(self._items)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[ScanResult]:
        return iter(self.items)

    def __str__(self) -> str:
        return f"Total results: {self.count()}"