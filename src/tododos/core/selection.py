# src/tododos/core/selection.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SelectionCursor:
    """
    Selected position inside the filtered view.

    `index` is None exactly when the filtered view is empty (after clamp()).
    Every operation takes the current filtered length; the cursor never looks
    at tasks itself.
    """

    index: int | None = 0

    def clamp(self, length: int) -> None:
        if length <= 0:
            self.index = None
        elif self.index is None:
            self.index = 0
        else:
            self.index = max(0, min(self.index, length - 1))

    def up(self, length: int) -> None:
        self.clamp(length)
        if self.index is not None:
            self.index = max(0, self.index - 1)

    def down(self, length: int) -> None:
        self.clamp(length)
        if self.index is not None:
            self.index = min(length - 1, self.index + 1)

    def home(self, length: int) -> None:
        self.index = 0 if length > 0 else None

    def end(self, length: int) -> None:
        self.index = length - 1 if length > 0 else None

    def jump_to(self, number: int, length: int) -> bool:
        """Select the 1-based `number`. Out of range leaves the selection alone."""
        if not 1 <= number <= length:
            return False
        self.index = number - 1
        return True
