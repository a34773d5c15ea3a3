from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


@dataclass(frozen=True)
class HandlerResponse:
    """Status and JSON body a handler returns to its caller.

    A `text` value is sent as text/plain instead of JSON; with neither set
    the response is empty (pre-flight).
    """

    status_code: int
    body: dict[str, Any] | None = None
    text: str | None = None

    @classmethod
    def ok(cls, **payload: Any) -> "HandlerResponse":
        return cls(HTTPStatus.OK, {"ok": True, **payload})

    @classmethod
    def error(cls, status_code: int, message: str) -> "HandlerResponse":
        return cls(status_code, {"ok": False, "error": message})

    @classmethod
    def plain_ok(cls) -> "HandlerResponse":
        return cls(HTTPStatus.OK, text="ok")

    @classmethod
    def preflight(cls) -> "HandlerResponse":
        return cls(HTTPStatus.NO_CONTENT)

    @classmethod
    def method_not_allowed(cls) -> "HandlerResponse":
        return cls.error(HTTPStatus.METHOD_NOT_ALLOWED, "Method not allowed")
