from datetime import datetime, timezone


def utcnow_iso() -> str:
    """Current UTC time as an ISO 8601 string, the format all created_at columns use."""
    return datetime.now(timezone.utc).isoformat()
