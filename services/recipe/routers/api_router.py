"""
Recipe 서비스 라우터 통합
- 레시피, 단계, 이미지, 재료, 레시피-재료 라우터를 하나로 묶음
"""

from fastapi import APIRouter

from services.recipe.routers.image_router import router as image_router
from services.recipe.routers.ingredient_router import router as ingredient_router
from services.recipe.routers.recipe_ingredient_router import router as recipe_ingredient_router
from services.recipe.routers.recipe_router import router as recipe_router
from services.recipe.routers.step_router import router as step_router

router = APIRouter()

router.include_router(recipe_router)
router.include_router(step_router)
router.include_router(image_router)
router.include_router(ingredient_router)
router.include_router(recipe_ingredient_router)
