from __future__ import annotations


class StabilityDetector:
    """Track whether the current sweep mutated any vertex.

    A sweep that finishes with :attr:`changed` still ``False`` means the
    configuration is stable and the run can stop.
    """

    def __init__(self) -> None:
        self.changed = False
        self.sweep_moves = 0
        self.total_moves = 0

    def reset(self) -> None:
        """Clear the flag at the start of a sweep."""
        self.changed = False
        self.sweep_moves = 0

    def mark(self) -> None:
        """Record a single mutation."""
        self.changed = True
        self.sweep_moves += 1
        self.total_moves += 1

    @property
    def stable(self) -> bool:
        return not self.changed
