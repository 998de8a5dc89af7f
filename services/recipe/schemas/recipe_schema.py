"""
레시피 요청/응답용 Pydantic 스키마 모듈
- 모든 필드명은 프론트엔드 JSON 키(snake_case) 그대로 사용
- DB ORM과 분리, API 직렬화/유효성 검증용
"""

from typing import List, Optional

from pydantic import BaseModel, Field

# -----------------------------
# 요청 스키마
# -----------------------------

class RecipeIngredientIn(BaseModel):
    """레시피에 연결할 재료 (quantity 범위는 검증하지 않음)"""
    ingredient_id: int
    quantity: float


class RecipeStepIn(BaseModel):
    step_number: int
    instruction: str


class RecipeCreate(BaseModel):
    recipe_name: str
    user_id: int
    image_url: Optional[str] = None
    cooking_time: Optional[int] = None
    description: Optional[str] = None
    difficulty: Optional[str] = Field(None, description="Easy / Medium / Hard")
    ingredients: List[RecipeIngredientIn] = Field(default_factory=list)
    steps: List[RecipeStepIn] = Field(default_factory=list)


class RecipeUpdate(BaseModel):
    """
    레시피 전체 수정 요청
    - 스칼라 필드는 부분 수정 없이 그대로 덮어씀 (누락 시 NULL)
    - ingredients / steps 는 전체 교체
    """
    recipe_name: str
    image_url: Optional[str] = None
    cooking_time: Optional[int] = None
    description: Optional[str] = None
    difficulty: Optional[str] = None
    ingredients: List[RecipeIngredientIn] = Field(default_factory=list)
    steps: List[RecipeStepIn] = Field(default_factory=list)

# -----------------------------
# 응답 스키마
# -----------------------------

class RecipeIngredientOut(BaseModel):
    ingredient_id: int
    ingredient_name: Optional[str] = None
    unit: Optional[str] = None
    quantity: Optional[float] = None


class RecipeStepOut(BaseModel):
    step_number: int
    instruction: str


class RecipeDetailResponse(BaseModel):
    """레시피 집계 응답 (레시피 + 재료 + 단계)"""
    recipe_id: int
    recipe_name: str
    image_url: Optional[str] = None
    cooking_time: Optional[int] = None
    description: Optional[str] = None
    difficulty: Optional[str] = None
    user_id: Optional[int] = None
    ingredients: List[RecipeIngredientOut] = Field(default_factory=list)
    steps: List[RecipeStepOut] = Field(default_factory=list)


class RecipeRow(BaseModel):
    """recipes 테이블 단일 행"""
    recipe_id: int
    recipe_name: str
    image_url: Optional[str] = None
    cooking_time: Optional[int] = None
    description: Optional[str] = None
    difficulty: Optional[str] = None
    user_id: Optional[int] = None

    class Config:
        from_attributes = True


class RecipeCreateResponse(BaseModel):
    message: str
    recipe_id: int


class MessageResponse(BaseModel):
    message: str


class ImageUploadResponse(BaseModel):
    message: str
    data: RecipeRow


class ImageUrlResponse(BaseModel):
    imageUrl: Optional[str] = None
