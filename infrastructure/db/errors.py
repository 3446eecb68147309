"""
Postgres error codes raised through the Supabase client.

Part of RQ-110: Finish workout error taxonomy
"""
from typing import Optional

# Postgres SQLSTATE codes
UNIQUE_VIOLATION = "23505"
SERIALIZATION_FAILURE = "40001"


def error_code(exc: Exception) -> Optional[str]:
    """Return the Postgres code carried by a client exception, if any."""
    code = getattr(exc, "code", None)
    return str(code) if code is not None else None
