"""Collapse raw ray hits into one crossing per obstacle."""

from __future__ import annotations

from collections.abc import Iterable

from ..value_objects import Crossing, CrossingKey, RawHit, TieBreak

__all__ = ["CrossingDeduplicator"]


class CrossingDeduplicator:
    """Filters hits beyond the conduit end and keeps one hit per obstacle.

    Hits are grouped by ``(obstacle identity, linked-context identity)``,
    compared by value. A ray that grazes both faces of a wall, or hits
    coincident linked geometry, therefore yields a single crossing.

    Attributes:
        tie_break: Which hit of a group represents it. With
            FIRST_ENCOUNTERED the first hit in input order wins. With
            NEAREST the smallest distance wins, earlier hits winning ties.
            Output order is first-occurrence order in both cases.
    """

    def __init__(self, tie_break: TieBreak = TieBreak.FIRST_ENCOUNTERED) -> None:
        self.tie_break = tie_break

    def deduplicate(self, hits: Iterable[RawHit], length: float) -> list[Crossing]:
        """Reduce hits for one segment to unique crossings.

        Args:
            hits: Raw hits in oracle order.
            length: Segment length; hits farther than this are discarded.
                A hit exactly at ``length`` or at 0 is kept.

        Returns:
            One crossing per obstacle group, in first-occurrence order.
        """
        chosen: dict[CrossingKey, RawHit] = {}
        for hit in hits:
            if hit.distance > length:
                continue
            key = hit.key
            current = chosen.get(key)
            if current is None:
                chosen[key] = hit
            elif self.tie_break == TieBreak.NEAREST and hit.distance < current.distance:
                # dict keeps the slot of the first occurrence
                chosen[key] = hit
        return [Crossing.from_hit(hit) for hit in chosen.values()]
