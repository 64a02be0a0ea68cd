from datetime import datetime, timezone

def get_utc_now() -> datetime:
    """Get current UTC datetime"""
    return datetime.now(timezone.utc)

def as_utc(dt: datetime) -> datetime:
    """Convert to an aware UTC datetime; naive values are taken as UTC already"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
