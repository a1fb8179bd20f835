"""Pydantic schemas for the node profile API."""

from pydantic import BaseModel, Field, field_validator


def _require_text(value: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError("must not be empty")
    return text


def _validate_rpc_url(value: str) -> str:
    url = value.strip()
    if not url:
        raise ValueError("must not be empty")
    if not (url.startswith("http://") or url.startswith("https://")):
        raise ValueError("must start with http:// or https://")
    return url.rstrip("/")


class NodeProfileCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    rpc_url: str
    rpc_user: str
    rpc_password: str = Field(min_length=1)
    network: str = Field(min_length=1, max_length=64)

    @field_validator("name", "rpc_user", "network")
    @classmethod
    def _trim(cls, value: str) -> str:
        return _require_text(value)

    @field_validator("rpc_url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        return _validate_rpc_url(value)


class NodeProfileRead(BaseModel):
    id: str
    name: str
    rpc_url: str
    rpc_user: str
    rpc_password: str
    network: str
    is_active: bool
    created_at: int

    model_config = {"from_attributes": True}


class ConnectionTestRequest(BaseModel):
    rpc_url: str
    rpc_user: str
    rpc_password: str

    @field_validator("rpc_url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        return _validate_rpc_url(value)


class ConnectionTestResult(BaseModel):
    success: bool
    message: str
