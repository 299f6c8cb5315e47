"""
Common/Shared Fixtures

Base factories used across multiple test layers.
"""
from datetime import datetime, timezone


def make_timestamp() -> str:
    """Generate current UTC timestamp"""
    return datetime.now(timezone.utc).isoformat()
