from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class ContactInfoSchema(BaseModel):
    email_address: Optional[str] = None
    phone_number: Optional[str] = None


class ProfileCreate(BaseModel):
    """Profile payload as handlers see it: snake_case, after SnakeCaseParamsMiddleware."""

    first_name: str
    last_name: str
    birth_date: Optional[date] = None
    contact_info: Optional[ContactInfoSchema] = None
    tags: list[str] = Field(default_factory=list)
