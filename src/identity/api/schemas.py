"""Pydantic request/response schemas for registration and login."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class RegisterRequest(BaseModel):
    username: StrictStr = Field(min_length=1, max_length=64)
    password: StrictStr = Field(min_length=8)

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"username": "alice", "password": "correct-horse-battery"}]},
    )


class LoginRequest(BaseModel):
    username: StrictStr
    password: StrictStr


class TokenResponse(BaseModel):
    token: str
