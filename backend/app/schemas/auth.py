"""
Схемы входа администратора
"""
from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str
    password: str


class SessionInfo(BaseModel):
    authenticated: bool
    email: Optional[str] = None
