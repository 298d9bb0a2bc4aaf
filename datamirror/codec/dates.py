"""Local (``DD/MM/YYYY``) date strings to the ``YYYYMMDDhhmmss`` storage format."""

from __future__ import annotations

from datetime import datetime

LOCAL_DATE_FORMAT = "%d/%m/%Y"


def looks_like_local_date(text: str) -> bool:
    """Exactly 10 characters with separators at positions 2 and 5."""
    return len(text) == 10 and text.find("/") == 2 and text.rfind("/") == 5


def to_storage_timestamp(moment: datetime) -> str:
    return (
        f"{moment.year:04d}{moment.month:02d}{moment.day:02d}"
        f"{moment.hour:02d}{moment.minute:02d}{moment.second:02d}"
    )


def local_date_to_storage(text: str) -> str:
    """Convert ``DD/MM/YYYY`` to a midnight storage timestamp; "" if it is not a valid date."""
    try:
        parsed = datetime.strptime(text, LOCAL_DATE_FORMAT)
    except (TypeError, ValueError):
        return ""
    return to_storage_timestamp(parsed)


def normalize_date(text: str) -> str:
    """Rewrite local dates to storage format, pass anything else through."""
    if looks_like_local_date(text):
        return local_date_to_storage(text)
    return text


__all__ = [
    "LOCAL_DATE_FORMAT",
    "local_date_to_storage",
    "looks_like_local_date",
    "normalize_date",
    "to_storage_timestamp",
]
