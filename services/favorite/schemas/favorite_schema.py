"""
Favorite 관련 Pydantic 스키마
"""
from pydantic import BaseModel, Field


class FavoriteRequest(BaseModel):
    """찜 추가/해제 요청 바디 {userId, recipeId}"""
    user_id: int = Field(..., alias="userId")
    recipe_id: int = Field(..., alias="recipeId")

    class Config:
        populate_by_name = True


class FavoriteOut(BaseModel):
    favorite_id: int
    user_id: int
    recipe_id: int


class FavoriteMessage(BaseModel):
    message: str
