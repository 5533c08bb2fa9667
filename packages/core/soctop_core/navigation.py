from __future__ import annotations

from enum import Enum


class Command(Enum):
    QUIT = "quit"
    NEXT_TAB = "next_tab"
    PREVIOUS_TAB = "previous_tab"


class NavigationState:
    """Cyclic index into the configured tab list."""

    def __init__(self, titles: list[str], index: int = 0) -> None:
        if not titles:
            raise ValueError("at least one tab is required")
        self.titles = list(titles)
        self.index = index % len(self.titles)

    @property
    def count(self) -> int:
        return len(self.titles)

    @property
    def current(self) -> str:
        return self.titles[self.index]

    def next_tab(self) -> int:
        self.index = (self.index + 1) % self.count
        return self.index

    def previous_tab(self) -> int:
        self.index = self.count - 1 if self.index == 0 else self.index - 1
        return self.index
