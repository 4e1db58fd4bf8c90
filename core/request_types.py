"""Shared request data types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request."""

    prefix: str
    method: str
    target_url: str
    headers: dict[str, str]
