"""
User 관련 Pydantic 스키마
- 응답 스키마에는 비밀번호(해시)를 포함하지 않음
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=4)
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    recipe_count: int = 0
    favorite_count: int = 0
    join_date: Optional[datetime] = None
    role_id: Optional[int] = None


class UserUpdate(BaseModel):
    """부분 수정 - 요청에 포함된 필드만 갱신"""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=4)
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    recipe_count: Optional[int] = None
    favorite_count: Optional[int] = None
    role_id: Optional[int] = None


class UserOut(BaseModel):
    user_id: int
    name: str
    email: str
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    recipe_count: int = 0
    favorite_count: int = 0
    join_date: Optional[datetime] = None
    role_id: Optional[int] = None
    role_name: Optional[str] = None

    class Config:
        from_attributes = True


class UserMessage(BaseModel):
    message: str


class ProfileImageResponse(BaseModel):
    message: str
    imageUrl: str
