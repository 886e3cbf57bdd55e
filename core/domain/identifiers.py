from __future__ import annotations

from uuid import uuid4


def generate_id(prefix: str = "T") -> str:
    """Short, display-friendly task id such as ``T3F9A61C02B``."""
    return f"{prefix}{uuid4().hex[:10].upper()}"


__all__ = ["generate_id"]
