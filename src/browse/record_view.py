"""Immutable filtered views over record snapshots.

A view keeps the snapshot it was derived from, so refining criteria
always starts again from the unfiltered records instead of stacking
filters on a previous result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.logging_config import get_logger
from core.types import Criterion, FilterLogic, FilterRequest, FormRecord, RecordSnapshot
from query.predicate_filter import apply_filter

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class RecordView:
    """Current view of a snapshot under active criteria.

    Attributes:
        snapshot: Unfiltered records the view is derived from.
        criteria: Active criteria, empty for the full snapshot.
        logic: Combinator across active criteria.
        records: Records matching the active criteria.
    """

    snapshot: RecordSnapshot
    criteria: tuple[Criterion, ...]
    logic: FilterLogic
    records: tuple[FormRecord, ...]

    @classmethod
    def of(cls, snapshot: RecordSnapshot) -> "RecordView":
        """Build an unfiltered view of a snapshot."""
        return cls(
            snapshot=snapshot,
            criteria=(),
            logic=FilterLogic.AND,
            records=snapshot.records,
        )

    @property
    def is_filtered(self) -> bool:
        """Return whether any criteria are active."""
        return bool(self.criteria)

    def refine(
        self,
        criteria: Sequence[Criterion],
        logic: FilterLogic = FilterLogic.AND,
    ) -> "RecordView":
        """Re-evaluate new criteria against the snapshot.

        Args:
            criteria: Replacement criteria; empty clears the filter.
            logic: Combinator across criteria.

        Returns:
            New view; this view is left unchanged.
        """
        logic = FilterLogic(logic)
        matched = apply_filter(self.snapshot.records, criteria, logic)
        _LOGGER.debug(
            "view_refined",
            form_id=self.snapshot.form_id,
            criteria_count=len(criteria),
            logic=logic.value,
            snapshot_count=len(self.snapshot.records),
            matched_count=len(matched),
        )
        return RecordView(
            snapshot=self.snapshot,
            criteria=tuple(criteria),
            logic=logic,
            records=matched,
        )

    def apply(self, request: FilterRequest) -> "RecordView":
        """Refine the view with a parsed filter request."""
        return self.refine(request.criteria, request.logic)
