"""
Rating 관련 Pydantic 스키마
- 요청 바디는 프론트 규약대로 camelCase(userId, recipeId), 응답은 컬럼명 그대로
"""
from typing import Optional

from pydantic import BaseModel, Field


class RatingCreate(BaseModel):
    user_id: int = Field(..., alias="userId")
    recipe_id: int = Field(..., alias="recipeId")
    score: int = Field(..., ge=0, le=5)
    comment: Optional[str] = None

    class Config:
        populate_by_name = True


class RatingUpdate(BaseModel):
    score: int = Field(..., ge=0, le=5)
    comment: Optional[str] = None


class RatingOut(BaseModel):
    rating_id: int
    user_id: int
    recipe_id: int
    score: int
    comment: Optional[str] = None

    class Config:
        from_attributes = True


class RatingMessage(BaseModel):
    message: str
