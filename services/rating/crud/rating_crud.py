"""
Rating CRUD 함수 (비동기 ORM)
"""
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from common.logger import get_logger
from services.rating.models.rating_model import Rating

logger = get_logger("rating_crud")


async def create_rating(
    db: AsyncSession,
    user_id: int,
    recipe_id: int,
    score: int,
    comment: Optional[str] = None,
) -> Rating:
    rating = Rating(user_id=user_id, recipe_id=recipe_id, score=score, comment=comment)
    try:
        db.add(rating)
        await db.commit()
        await db.refresh(rating)
    except Exception as e:
        await db.rollback()
        logger.error(f"평점 등록 실패: user_id={user_id}, recipe_id={recipe_id}, error={str(e)}")
        raise

    logger.info(f"평점 등록 완료: rating_id={rating.rating_id}, recipe_id={recipe_id}, score={score}")
    return rating


async def get_ratings(db: AsyncSession) -> List[Rating]:
    result = await db.execute(select(Rating).order_by(Rating.rating_id))
    return list(result.scalars().all())


async def get_ratings_by_recipe(db: AsyncSession, recipe_id: int) -> List[Rating]:
    """레시피별 평점 목록 (없으면 빈 리스트)"""
    result = await db.execute(
        select(Rating).where(Rating.recipe_id == recipe_id).order_by(Rating.rating_id)  # type: ignore
    )
    return list(result.scalars().all())


async def update_rating(db: AsyncSession, rating_id: int, score: int, comment: Optional[str]) -> bool:
    """점수/코멘트 교체, 대상이 없으면 False"""
    try:
        result = await db.execute(
            update(Rating)
            .where(Rating.rating_id == rating_id)  # type: ignore
            .values(score=score, comment=comment)
        )
        if result.rowcount == 0:
            await db.rollback()
            logger.warning(f"수정할 평점 없음: rating_id={rating_id}")
            return False
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"평점 수정 실패: rating_id={rating_id}, error={str(e)}")
        raise

    logger.info(f"평점 수정 완료: rating_id={rating_id}, score={score}")
    return True


async def delete_rating(db: AsyncSession, rating_id: int) -> bool:
    try:
        result = await db.execute(delete(Rating).where(Rating.rating_id == rating_id))  # type: ignore
        if result.rowcount == 0:
            await db.rollback()
            logger.warning(f"삭제할 평점 없음: rating_id={rating_id}")
            return False
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"평점 삭제 실패: rating_id={rating_id}, error={str(e)}")
        raise

    logger.info(f"평점 삭제 완료: rating_id={rating_id}")
    return True
