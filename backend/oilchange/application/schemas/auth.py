"""Pydantic DTOs for operator sign-in and sessions."""

from datetime import datetime

from pydantic import BaseModel, Field


class SignInRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255, pattern=r"\S+@\S+\.\S+")
    password: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    """The signed-in operator and shop. Tokens are returned only on sign-in."""

    operator_id: str
    shop_id: str
    email: str
    operator_name: str
    shop_name: str
    started_at: datetime
    id_token: str | None = None

    model_config = {"from_attributes": True}
