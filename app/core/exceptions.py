"""HTTP error taxonomy.

Thin ``HTTPException`` subclasses so routers can raise by meaning rather
than by status code.  FastAPI renders all of them as ``{"detail": ...}``.
"""

from __future__ import annotations

from fastapi import HTTPException


class BadRequest(HTTPException):
    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=400, detail=detail)


class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=401, detail=detail)


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Administrator access required") -> None:
        super().__init__(status_code=403, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(status_code=404, detail=detail)


class Unprocessable(HTTPException):
    def __init__(self, detail: str = "Unprocessable entity") -> None:
        super().__init__(status_code=422, detail=detail)


class ServerError(HTTPException):
    """Generic 500. Store detail is logged, never returned."""

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(status_code=500, detail=detail)
