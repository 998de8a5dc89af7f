"""
레시피 서비스 테이블(recipes, ingredients, recipe_ingredients, recipe_steps)의 ORM 모델 정의 모듈
- 조회/쓰기는 crud 계층의 raw SQL 로 처리하고, 모델은 스키마(DDL) 정의 용도
- user_id 는 user 서비스 소유 엔티티라 외래키를 걸지 않음
"""

from sqlalchemy import Column, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Ingredient(Base):
    """재료 마스터 데이터"""
    __tablename__ = "ingredients"

    ingredient_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    unit = Column(String(50), nullable=False)


class Recipe(Base):
    __tablename__ = "recipes"

    recipe_id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_name = Column(String(255), nullable=False)
    image_url = Column(String(500), nullable=True)
    cooking_time = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    difficulty = Column(String(20), nullable=True)  # Easy / Medium / Hard (강제하지 않음)
    user_id = Column(Integer, nullable=True, index=True)


class RecipeIngredient(Base):
    """레시피-재료 연결 테이블 (수량 포함)"""
    __tablename__ = "recipe_ingredients"

    recipe_ingredient_id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(Integer, ForeignKey("recipes.recipe_id"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.ingredient_id"), nullable=False)
    quantity = Column(Float, nullable=False)


class RecipeStep(Base):
    """
    조리 단계
    - step_number 는 레시피 내에서 1부터 연속 (단계 삭제 시 재번호)
    - 재번호 UPDATE 가 중간 상태에서 충돌하지 않도록 유니크 제약 대신 인덱스만 둠
    """
    __tablename__ = "recipe_steps"

    step_id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(Integer, ForeignKey("recipes.recipe_id"), nullable=False)
    step_number = Column(Integer, nullable=False)
    instruction = Column(Text, nullable=False)

    __table_args__ = (
        Index("ix_recipe_steps_recipe_step", "recipe_id", "step_number"),
    )
