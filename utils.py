from datetime import datetime, timezone


def timestamp() -> float:
    return datetime.now(timezone.utc).timestamp()


def to_datetime(ts: float) -> datetime:
    return datetime.fromtimestamp(ts, timezone.utc)
