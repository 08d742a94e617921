"""Field readers shared by the MongoDB adapters."""

from datetime import date, datetime, time
from typing import Any, Dict, List, Optional

from src.domain.entities.errors import MalformedRecordError
from src.shared import get_logger
from src.shared.dates import parse_date

logger = get_logger(__name__)


def required_date(document: Dict[str, Any], field: str, record_type: str) -> date:
    """
    Read a mandatory date field.

    Raises:
        MalformedRecordError: If the field is missing or unparseable.
    """
    value = document.get(field)
    try:
        parsed = parse_date(value)
    except ValueError as exc:
        raise MalformedRecordError(record_type, field, value) from exc
    if parsed is None:
        raise MalformedRecordError(record_type, field, value)
    return parsed


def optional_date(
    document: Dict[str, Any], field: str, record_type: str
) -> Optional[date]:
    """Read an optional date field; an unparseable value is logged and dropped."""
    value = document.get(field)
    try:
        return parse_date(value)
    except ValueError:
        logger.warning(
            "records.malformed_field",
            record_type=record_type,
            record_id=document.get("id"),
            field=field,
            value=repr(value),
        )
        return None


def optional_int(
    document: Dict[str, Any], field: str, record_type: str
) -> Optional[int]:
    """Read an optional whole number; a non-numeric value is logged and dropped."""
    value = document.get(field)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(
            "records.malformed_field",
            record_type=record_type,
            record_id=document.get("id"),
            field=field,
            value=repr(value),
        )
        return None


def to_datetime(value: date) -> datetime:
    """BSON has no date type; days are stored as midnight datetimes."""
    return datetime.combine(value, time.min)


def date_list(
    document: Dict[str, Any], field: str, key: str, record_type: str
) -> List[date]:
    """
    Read a list of dates stored either bare or as ``{key: value}`` entries.

    Unparseable entries are logged and left out.
    """
    dates: List[date] = []
    for entry in document.get(field) or []:
        value = entry.get(key) if isinstance(entry, dict) else entry
        try:
            parsed = parse_date(value)
        except ValueError:
            logger.warning(
                "records.malformed_field",
                record_type=record_type,
                record_id=document.get("id"),
                field=field,
                value=repr(value),
            )
            continue
        if parsed is not None:
            dates.append(parsed)
    return sorted(dates)
