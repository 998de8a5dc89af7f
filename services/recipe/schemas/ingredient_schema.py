"""
재료 마스터 / 레시피-재료 연결 행 스키마
- 필수값 누락은 pydantic 검증 대신 라우터에서 {error} 메시지로 400 처리
"""

from typing import Optional

from pydantic import BaseModel


class IngredientCreate(BaseModel):
    """재료 등록 - name, unit 누락 시 라우터에서 400"""
    name: Optional[str] = None
    unit: Optional[str] = None


class IngredientUpdate(BaseModel):
    """재료 부분 수정 (None 필드는 기존 값 유지)"""
    name: Optional[str] = None
    unit: Optional[str] = None


class IngredientOut(BaseModel):
    ingredient_id: int
    name: str
    unit: str

    class Config:
        from_attributes = True


class RecipeIngredientCreate(BaseModel):
    recipe_id: Optional[int] = None
    ingredient_id: Optional[int] = None
    quantity: Optional[float] = None


class RecipeIngredientUpdate(BaseModel):
    quantity: Optional[float] = None


class RecipeIngredientRow(BaseModel):
    recipe_ingredient_id: int
    recipe_id: int
    ingredient_id: int
    quantity: float
    ingredient_name: Optional[str] = None
    unit: Optional[str] = None
