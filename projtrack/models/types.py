from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from sqlalchemy.types import JSON, TypeDecorator

CHANGE_SET_FORMAT = 1


def utcnow():
    """Naive UTC timestamp, the way every DateTime column in the app stores it."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _jsonable(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


class ChangeSet(TypeDecorator):
    """
    Stores a ``{field: [old, new]}`` mapping as a list of explicit records:

        {"format": 1, "changes": [{"field": "subject", "old": "a", "new": "b"}]}

    Rows written before the record layout existed hold the bare mapping,
    which is still accepted on read.
    """

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        records = []
        for field, pair in value.items():
            old, new = pair
            records.append({"field": str(field), "old": _jsonable(old), "new": _jsonable(new)})
        return {"format": CHANGE_SET_FORMAT, "changes": records}

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if isinstance(value.get("format"), int) and isinstance(value.get("changes"), list):
            if value["format"] != CHANGE_SET_FORMAT:
                raise ValueError(f"Unsupported change-set format: {value['format']!r}")
            return {r["field"]: [r["old"], r["new"]] for r in value["changes"]}
        # legacy bare mapping
        return {field: list(pair) for field, pair in value.items()}
