from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.exceptions import ValidationError
from .factory import RowShapeStrategyFactory
from .model import AttendanceEvent, NormalizationResult, RowBatch, RowRejection

logger = logging.getLogger(__name__)


def _event_order(event: AttendanceEvent):
    return (event.date, event.period_number)


class RecordNormalizer:
    """Turn tagged storage batches into one canonical AttendanceEvent stream.

    A bad row (or a bad period on a row) is reported as a RowRejection and skipped;
    the rest of the batch is still normalized.
    """

    def __init__(self, *, strategy_factory: Optional[RowShapeStrategyFactory] = None):
        self._factory = strategy_factory or RowShapeStrategyFactory()

    def normalize(self, batch: RowBatch) -> NormalizationResult:
        return self.normalize_many([batch])

    def normalize_many(self, batches: Iterable[RowBatch]) -> NormalizationResult:
        events: list[AttendanceEvent] = []
        rejections: list[RowRejection] = []
        seen: set[tuple] = set()
        row_offset = 0

        for batch in batches:
            strategy = self._factory.for_shape(batch.shape)

            for i, row in enumerate(batch.rows):
                row_index = row_offset + i
                try:
                    decisions = strategy.expand(row)
                except ValidationError as e:
                    rejections.append(RowRejection(row_index=row_index, reason=str(e), row=row))
                    logger.warning("Rejected attendance row %s: %s", row_index, e)
                    continue

                for d in decisions:
                    if d.error:
                        rejections.append(
                            RowRejection(row_index=row_index, reason=d.error, period_number=d.period_number, row=row)
                        )
                        logger.warning("Rejected period %s of attendance row %s: %s", d.period_number, row_index, d.error)
                        continue
                    if d.event is None:
                        continue

                    if d.event.key in seen:
                        reason = "duplicate student/class/date/period"
                        rejections.append(
                            RowRejection(row_index=row_index, reason=reason, period_number=d.period_number, row=row)
                        )
                        logger.warning("Rejected period %s of attendance row %s: %s", d.period_number, row_index, reason)
                        continue

                    seen.add(d.event.key)
                    events.append(d.event)

            row_offset += len(batch.rows)
            logger.debug("Normalized %s rows of shape %s", len(batch.rows), batch.shape)

        # stable: ties keep input order
        events.sort(key=_event_order)
        return NormalizationResult(events=tuple(events), rejections=tuple(rejections))
