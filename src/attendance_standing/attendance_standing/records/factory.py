from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import RecordShape
from ..core.exceptions import ValidationError
from .strategies.base import RowShapeStrategy
from .strategies.legacy_strategy import LegacyRowStrategy
from .strategies.period_columns_strategy import PeriodColumnsRowStrategy


@dataclass
class RowShapeStrategyFactory:
    """Factory Pattern: pick the row strategy from the batch's shape tag.

    The tag comes from the storage collaborator; rows are never sniffed.
    """

    def for_shape(self, shape: RecordShape | str) -> RowShapeStrategy:
        try:
            shape = RecordShape(shape)
        except ValueError:
            raise ValidationError(f"Unsupported record shape: {shape!r}") from None

        if shape == RecordShape.LEGACY:
            return LegacyRowStrategy()
        if shape == RecordShape.PERIOD_COLUMNS:
            return PeriodColumnsRowStrategy()
        raise ValidationError(f"Unsupported record shape: {shape!r}")
