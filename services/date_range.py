"""Date range predicate applied to a user's exercise log."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from utils.dates import end_of_day, parse_optional_date


class RangeKind(str, Enum):
    NONE = "none"
    FROM_ONLY = "from_only"
    TO_ONLY = "to_only"
    BOTH = "both"


@dataclass(frozen=True)
class DateRange:
    """Inclusive bounds on an entry's date.

    ``start`` is compared as given. ``end`` is already pushed to the last
    instant of its day, so entries logged any time on that day match.
    """
    kind: RangeKind
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def contains(self, value: datetime) -> bool:
        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True

    def to_mongo_cond(self, field: str = "$$exercise.date") -> Any:
        """Build the ``cond`` expression of a ``$filter`` stage.

        Args:
            field: Aggregation variable path of the entry date

        Returns:
            Expression dict, or True when every entry is kept
        """
        if self.kind == RangeKind.FROM_ONLY:
            return {"$gte": [field, self.start]}
        if self.kind == RangeKind.TO_ONLY:
            return {"$lte": [field, self.end]}
        if self.kind == RangeKind.BOTH:
            return {"$and": [
                {"$gte": [field, self.start]},
                {"$lte": [field, self.end]},
            ]}
        return True


ALL_DATES = DateRange(RangeKind.NONE)


def build_date_range(date_from: Optional[str], date_to: Optional[str]) -> DateRange:
    """Turn optional ``from``/``to`` query strings into a DateRange.

    Raises:
        InvalidDateFormatError: if either bound is present but unparseable
    """
    start = parse_optional_date(date_from)
    end = parse_optional_date(date_to)
    if end is not None:
        end = end_of_day(end)

    if start is not None and end is not None:
        return DateRange(RangeKind.BOTH, start=start, end=end)
    if start is not None:
        return DateRange(RangeKind.FROM_ONLY, start=start)
    if end is not None:
        return DateRange(RangeKind.TO_ONLY, end=end)
    return ALL_DATES
