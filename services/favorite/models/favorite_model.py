"""
Favorite 서비스 ORM 모델 (favorites)
"""
from sqlalchemy import Column, Index, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Favorite(Base):
    __tablename__ = "favorites"

    favorite_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False)
    recipe_id = Column(Integer, nullable=False)

    __table_args__ = (
        Index("ix_favorites_user_recipe", "user_id", "recipe_id"),
    )
