from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BusyRegistry:
    """Per-target in-flight markers for single-item mutations."""

    in_flight: set[str] = field(default_factory=set)

    def begin(self, key: str) -> bool:
        if key in self.in_flight:
            return False
        self.in_flight.add(key)
        return True

    def end(self, key: str) -> None:
        self.in_flight.discard(key)

    def is_busy(self, key: str) -> bool:
        return key in self.in_flight
