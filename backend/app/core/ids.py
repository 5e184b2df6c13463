"""Identifier and clock providers. Services receive them instead of building ids themselves."""

import uuid
from collections.abc import Callable
from datetime import datetime, timezone

IdGenerator = Callable[[], str]


def uuid_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
