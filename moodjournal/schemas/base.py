"""
Base schemas with common functionality.
"""
from datetime import datetime
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, List

from pydantic import BaseModel, field_serializer

from moodjournal.core.time_utils import to_iso


def unique_names(names: Iterable[str]) -> List[str]:
    """Drop blank names and repeats, keep first-seen order.

    Names are otherwise kept exactly as given; matching is byte-for-byte.
    """
    seen = set()
    result = []
    for name in names:
        if name.strip() and name not in seen:
            seen.add(name)
            result.append(name)
    return result


class TimestampMixin(BaseModel):
    """Mixin for models carrying an entry ``timestamp``.

    Ensures the timestamp is always serialized as UTC ISO 8601 with 'Z' suffix.
    """

    @field_serializer('timestamp', check_fields=False)
    def serialize_datetime(self, dt: datetime, _info):
        if dt is None:
            return None
        return to_iso(dt)


class PatchModel(BaseModel):
    """Partial update whose absent fields are distinguishable from cleared ones.

    Only fields named in ``nullable_fields`` may be explicitly set to ``None``
    to clear them; ``None`` anywhere else means "leave unchanged".
    """
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    def provided(self) -> Dict[str, Any]:
        data = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None and name not in self.nullable_fields:
                continue
            data[name] = value
        return data
