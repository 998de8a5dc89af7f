"""
로그인 요청/응답 스키마
- 응답에는 비밀번호 해시 없이 사용자 정보만 포함
"""

from pydantic import BaseModel, EmailStr

from services.user.schemas.user_schema import UserOut


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    message: str
    user: UserOut
