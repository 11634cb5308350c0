from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as naive UTC, matching how scheduled_at is stored"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
