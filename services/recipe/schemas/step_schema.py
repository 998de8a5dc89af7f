"""
레시피 단계 추가/수정 요청 스키마
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from services.recipe.schemas.recipe_schema import RecipeStepIn


class StepsCreate(BaseModel):
    """단계 추가 요청 바디 (빈 배열은 라우터에서 400 처리)"""
    steps: List[RecipeStepIn] = Field(default_factory=list)


class StepPatch(BaseModel):
    """단계 설명 수정 항목 - step_number / instruction 이 비어 있으면 건너뜀"""
    step_number: Optional[int] = None
    instruction: Optional[str] = None


class StepsUpdate(BaseModel):
    steps: List[StepPatch] = Field(default_factory=list)
