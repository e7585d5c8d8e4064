import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from codearena.data.schemas.enums import UserRole


class UserBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, examples=["algo_champ"])
    email: EmailStr = Field(..., examples=["champ@example.com"])


class UserCreateModel(UserBase):
    password: str = Field(
        ...,
        min_length=8,
        max_length=64,
        examples=["Str0ngP@ss!"],
        description="Must contain at least 8 characters",
    )


class UserLoginModel(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=64)


class UserBaseResponse(BaseModel):
    id: uuid.UUID
    username: str
    role: UserRole = UserRole.USER

    model_config = {"from_attributes": True}


class UserResponseModel(UserBaseResponse):
    email: str
    total_submissions: int
    total_solved: int
    last_solved_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    token: str
    user: UserResponseModel
