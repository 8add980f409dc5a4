"""Small helpers shared by the services."""
import datetime
from typing import Any, List, Mapping

from .errors import ValidationError

_EPOCH = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


def now_iso() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_timestamp(value: Any) -> datetime.datetime:
    """Parse an ISO-8601 timestamp; missing or malformed values sort first."""
    if not isinstance(value, str) or not value:
        return _EPOCH
    try:
        parsed = datetime.datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def sort_by_time(records: List[Mapping], field: str, newest_first: bool = True) -> List[Mapping]:
    return sorted(records, key=lambda r: parse_timestamp(r.get(field)), reverse=newest_first)


def to_int(value: Any, field: str) -> int:
    """Convert a request value to ``int`` or raise :class:`ValidationError`."""
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be an integer')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer')


def require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{field} is required')
    return value


def toggle_member(items: List[str], member: str) -> List[str]:
    """Add *member* if absent, remove it if present."""
    if member in items:
        return [i for i in items if i != member]
    return items + [member]
