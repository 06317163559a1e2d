from datetime import datetime, timezone
from uuid import uuid4


def generate_id() -> str:
    return uuid4().hex


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
