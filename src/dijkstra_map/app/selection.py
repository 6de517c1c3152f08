# app/selection.py
from dataclasses import dataclass, field
from enum import Enum


class SelectionChange(Enum):
    ORIGIN_SET = "origin_set"
    DESTINATION_SET = "destination_set"
    DESELECTED = "deselected"
    RESTARTED = "restarted"  # a third node became the new origin


@dataclass
class NodeSelection:
    """Origin/destination picking driven by clicks on nodes."""

    indices: list[int] = field(default_factory=list)

    @property
    def origin(self) -> int | None:
        return self.indices[0] if self.indices else None

    @property
    def destination(self) -> int | None:
        return self.indices[1] if len(self.indices) > 1 else None

    @property
    def complete(self) -> bool:
        return len(self.indices) == 2

    def toggle(self, index: int) -> SelectionChange:
        if index in self.indices:
            self.indices.remove(index)
            return SelectionChange.DESELECTED
        if len(self.indices) >= 2:
            self.indices = [index]
            return SelectionChange.RESTARTED
        self.indices.append(index)
        return SelectionChange.ORIGIN_SET if len(self.indices) == 1 else SelectionChange.DESTINATION_SET

    def clear(self) -> None:
        self.indices.clear()
