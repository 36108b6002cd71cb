"""In-memory reference database ("wiki").

Records are grouped by kind and keyed by id. Matching is a plain
case-insensitive substring test against each record's search blob: no
tokenising, no ranking. Results always come back sorted by name.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from mother.models import ReferenceKind, ReferenceRecord
from mother.seed import seed_records

logger = logging.getLogger(__name__)


class SearchHit(NamedTuple):
    kind: ReferenceKind
    record: ReferenceRecord


def name_order(name: str) -> tuple[str, str]:
    """Sort key: alphabetical first, then lowercase before uppercase."""
    return name.casefold(), name.swapcase()


def _by_name(record: ReferenceRecord) -> tuple[str, str]:
    return name_order(record.name)


class ReferenceStore:
    def __init__(self, records: list[ReferenceRecord] | None = None) -> None:
        self._records: dict[ReferenceKind, dict[str, ReferenceRecord]] = {
            kind: {} for kind in ReferenceKind
        }
        for record in seed_records() if records is None else records:
            self.add(record)
        logger.debug("reference store seeded counts=%s", self.counts())

    def add(self, record: ReferenceRecord) -> None:
        """Insert a record. Ids are unique within a kind."""
        bucket = self._records[record.KIND]
        if record.id in bucket:
            raise ValueError(f"Duplicate {record.KIND.value} id: {record.id!r}")
        bucket[record.id] = record

    def get(self, kind: ReferenceKind, record_id: str) -> ReferenceRecord | None:
        return self._records[kind].get(record_id)

    def get_all(self, kind: ReferenceKind) -> list[ReferenceRecord]:
        return sorted(self._records[kind].values(), key=_by_name)

    def search(
        self, kind: ReferenceKind, query: str, franchise: str | None = None
    ) -> list[ReferenceRecord]:
        """Records of `kind` whose search blob contains `query` (case-insensitive).

        An empty query matches every record.
        """
        needle = query.lower()
        return [
            r for r in self.get_all(kind)
            if (not franchise or r.franchise == franchise) and needle in r.search_blob()
        ]

    def search_all(
        self,
        query: str,
        franchise: str | None = None,
        kind: ReferenceKind | None = None,
    ) -> list[SearchHit]:
        """Search every kind (or just `kind`) and merge the hits by name."""
        kinds = [kind] if kind else list(ReferenceKind)
        hits = [
            SearchHit(k, r)
            for k in kinds
            for r in self.search(k, query, franchise)
        ]
        return sorted(hits, key=lambda h: _by_name(h.record))

    def counts(self) -> dict[ReferenceKind, int]:
        return {kind: len(bucket) for kind, bucket in self._records.items()}
