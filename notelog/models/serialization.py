"""Helper di serializzazione condivisi dai modelli."""

from datetime import datetime
from typing import Optional


def isoformat_utc(value: Optional[datetime]) -> Optional[str]:
    """Datetime naive (UTC) -> stringa ISO 8601 al millisecondo con suffisso 'Z'."""
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds") + "Z"
