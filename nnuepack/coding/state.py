"""Decoder state: the three scalars threaded through every decode step."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CoderState:
    """Position of a decoder within an encoded byte sequence.

    Parameters
    ----------
    high:
        Width of the current interval, kept at or above the renormalization
        threshold before every threshold computation.
    current:
        Consumed input numeral, reduced into ``[0, high)``.
    index:
        Cursor of the next byte to consume.
    """

    high: int = 1
    current: int = 0
    index: int = 0

    @classmethod
    def initial(cls) -> "CoderState":
        return cls(high=1, current=0, index=0)

    def snapshot(self) -> "CoderState":
        """Return an independent copy of this state."""

        return CoderState(self.high, self.current, self.index)

    def restore(self, snapshot: "CoderState") -> None:
        """Overwrite this state in place with a previously taken snapshot."""

        self.high = snapshot.high
        self.current = snapshot.current
        self.index = snapshot.index


__all__ = ["CoderState"]
