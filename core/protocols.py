"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard or plain console)."""

    def log_request(self, method: str, path: str) -> None: ...
    def log_header(self, name: str, value: str) -> None: ...
    def log_forward(self, prefix: str, target_url: str) -> None: ...
    def log_response(self, target_url: str, status: int) -> None: ...
    def log_not_found(self, path: str) -> None: ...
    def log_error(self, target_url: str, message: str) -> None: ...
