"""
Envelope formatting for JSON responses.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Optional

from api.models import Envelope


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. ``2024-01-01T10:00:00.000Z``."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def json_safe(value: Any) -> Any:
    """Replace NaN / infinite floats with ``None`` so the body is valid JSON."""
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(v) for v in value]
    return value


def format_response(status: str, message: str, data: Any = None, meta: Optional[dict] = None) -> dict:
    """Wrap *data* in the standard envelope, stamping ``meta.timestamp``."""
    envelope = Envelope(
        status=status,
        message=message,
        data=data,
        meta={'timestamp': utc_timestamp(), **(meta or {})},
    )
    return json_safe(envelope.to_dict())


def error_response(message: str, exc: BaseException, **extra_meta) -> dict:
    """Error envelope carrying the exception text under ``meta.error``."""
    return format_response('error', message, None, {'error': str(exc), **extra_meta})
