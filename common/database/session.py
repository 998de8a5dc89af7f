"""
서비스별 비동기 DB 엔진/세션 관리
- 엔진(커넥션 풀)은 앱 lifespan 에서 생성하고 종료 시 dispose
- 요청마다 AsyncSession 하나를 FastAPI 의존성으로 제공
"""
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import MetaData, event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from common.logger import get_logger

logger = get_logger("database")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseSessionManager:
    """
    단일 데이터베이스에 대한 엔진 + 세션 팩토리 묶음
    - sqlite URL 은 커넥션마다 외래키 제약을 켠다 (PostgreSQL 과 동일하게 참조 오류 발생)
    """

    def __init__(self, url: str, name: str = "db", *, echo: bool = False, pool_size: Optional[int] = None):
        self.name = name
        self.url = url
        engine_kwargs = {"echo": echo, "future": True}
        if url.startswith("sqlite"):
            # 테스트용 파일 DB: 이벤트 루프 간 커넥션 공유 방지
            engine_kwargs["poolclass"] = NullPool
        else:
            engine_kwargs["pool_pre_ping"] = True
            if pool_size:
                engine_kwargs["pool_size"] = pool_size

        self.engine: Optional[AsyncEngine] = create_async_engine(url, **engine_kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.sessionmaker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(f"[{name}] DB 엔진 생성됨")

    async def create_all(self, metadata: MetaData) -> None:
        """메타데이터 기준 테이블 생성 (로컬/테스트 용도)"""
        if self.engine is None:
            raise RuntimeError(f"[{self.name}] DB 엔진이 이미 종료되었습니다.")
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        logger.info(f"[{self.name}] 테이블 생성 완료")

    async def close(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        logger.info(f"[{self.name}] DB 엔진 종료됨")

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self.engine is None:
            raise RuntimeError(f"[{self.name}] DB 엔진이 초기화되지 않았습니다.")
        logger.debug(f"[{self.name}] 데이터베이스 세션 생성")
        async with self.sessionmaker() as session:
            yield session
        logger.debug(f"[{self.name}] 데이터베이스 세션 종료")


def state_db_dependency(state_key: str):
    """
    app.state.<state_key> 에 등록된 DatabaseSessionManager 로부터
    요청 단위 세션을 꺼내는 FastAPI 의존성 생성
    """
    async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
        manager: Optional[DatabaseSessionManager] = getattr(request.app.state, state_key, None)
        if manager is None:
            raise RuntimeError(f"{state_key} 가 앱 lifespan 에서 초기화되지 않았습니다.")
        async for session in manager.session():
            yield session

    get_db.__name__ = f"get_{state_key}"
    return get_db


async def open_database(app, state_key: str, url: str, settings, metadata: Optional[MetaData] = None) -> DatabaseSessionManager:
    """lifespan 시작 시 호출: 매니저 생성 후 app.state 에 등록 (옵션: 테이블 자동 생성)"""
    manager = DatabaseSessionManager(
        url,
        name=state_key,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
    )
    if settings.auto_create_tables and metadata is not None:
        await manager.create_all(metadata)
    setattr(app.state, state_key, manager)
    return manager


async def close_database(app, state_key: str) -> None:
    """lifespan 종료 시 호출: 커넥션 풀 반환"""
    manager: Optional[DatabaseSessionManager] = getattr(app.state, state_key, None)
    if manager is not None:
        await manager.close()
        setattr(app.state, state_key, None)
