"""Pydantic models for console request bodies."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials submitted from the login view."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class OrderStatusRequest(BaseModel):
    """New status for an order."""

    status: str
