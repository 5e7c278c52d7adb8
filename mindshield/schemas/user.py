"""
Pydantic schemas for User entity.
"""
from pydantic import EmailStr, Field
from typing import Dict, List, Optional
from datetime import datetime
from mindshield.schemas.common import CamelModel


class Badge(CamelModel):
    """Badge earned by a user."""
    name: str
    icon: str
    earned_at: datetime


class UserCreate(CamelModel):
    """Schema for user registration."""
    name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=13, le=120)
    password: str = Field(..., min_length=6)
    email: Optional[EmailStr] = None
    responses: Dict[str, str] = Field(default_factory=dict)


class UserLogin(CamelModel):
    """Schema for user login by name or email."""
    username: str
    password: str


class Token(CamelModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"
    user_id: int


class UserResponse(CamelModel):
    """Schema for user response."""
    id: int
    name: str
    age: int
    email: Optional[str] = None
    streak_current: int
    streak_longest: int
    streak_last_login: Optional[datetime] = None
    badges: List[Badge] = []
    created_at: datetime


class RegisterResponse(CamelModel):
    """Schema for the registration envelope."""
    success: bool = True
    message: str = "User registered successfully"
    user: UserResponse
