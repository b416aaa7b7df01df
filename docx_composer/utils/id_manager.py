"""
Identifier bookkeeping for package assembly.

``RelationshipIdAllocator`` hands out ``rIdN`` ids per owning relationships
part and keeps the relation table that part writers look ids up in.
``RevisionIdAllocator`` numbers tracked changes in emission order.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Relationship:
    """One entry of a ``.rels`` part."""

    rel_id: str
    rel_type: str
    target: str
    target_mode: Optional[str] = None


class RelationshipIdAllocator:
    """
    Relation table keyed by source part.

    Ids restart at ``rId1`` for each source and increase monotonically in
    allocation order.
    """

    def __init__(self):
        self._relationships: Dict[str, List[Relationship]] = {}
        self._counters: Dict[str, int] = {}

    def allocate(self, source: str, rel_type: str, target: str, target_mode: Optional[str] = None) -> str:
        """Record a relationship from ``source`` and return its new id."""
        self._counters[source] = self._counters.get(source, 0) + 1
        rel_id = f"rId{self._counters[source]}"
        self._relationships.setdefault(source, []).append(
            Relationship(rel_id, rel_type, target, target_mode)
        )
        logger.debug(f"Allocated {rel_id} for {source} -> {target}")
        return rel_id

    def lookup(self, source: str, target: str) -> str:
        """Id of the relationship from ``source`` to ``target``; KeyError when not allocated."""
        for relationship in self._relationships.get(source, []):
            if relationship.target == target:
                return relationship.rel_id
        raise KeyError(f"No relationship from {source} to {target}")

    def relationships(self, source: str) -> List[Relationship]:
        return list(self._relationships.get(source, []))

    def sources(self) -> List[str]:
        """Sources in first-allocation order."""
        return list(self._relationships.keys())


class RevisionIdAllocator:
    """Sequential ``w:id`` values for tracked insertions and deletions."""

    def __init__(self, start: int = 1):
        self._next = start

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value
