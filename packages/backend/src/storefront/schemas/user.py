"""Pydantic schemas for users and sessions."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(default="", max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    age: Optional[int] = Field(None, ge=0)
    password: str = Field(..., min_length=8)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserRead(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    age: Optional[int]
    rol: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
