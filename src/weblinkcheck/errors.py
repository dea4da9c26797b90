from __future__ import annotations

from enum import StrEnum


class Reason(StrEnum):
    HTTP = "HTTP"  # transport failure or 4xx/5xx status
    DOM = "DOM"  # page fetched, but the requested anchor is not on it


class LinkCheckError(Exception):
    """Raised by ``check_web`` for every expected failure of a link.

    Never raised for programming errors. The reporting layer catches this,
    inspects ``reason`` and aggregates results across many links. Nothing in
    the checker retries or logs-and-swallows it.
    """

    def __init__(
        self,
        reason: Reason,
        message: str,
        *,
        url: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.url = url
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {
            "error": {
                "reason": self.reason,
                "message": self.message,
                "url": self.url,
                "status_code": self.status_code,
            }
        }
