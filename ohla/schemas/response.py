"""Uniform response envelope shared by every enveloped endpoint."""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ApiResponse(BaseModel, Generic[T]):
    status: int  # HTTP status code, mirrored in the body
    data: T | None = None
    message: str
    error: str | None = None  # error kind tag, only on failures
    details: str | None = None
    timestamp: str = Field(default_factory=_now_iso)

    @classmethod
    def success(cls, data: T | None, message: str, status: int = 200) -> "ApiResponse[T]":
        return cls(status=status, data=data, message=message)
