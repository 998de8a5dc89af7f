# errors.py
"""
공통 에러 타입 정의 및 FastAPI 예외 핸들러
- 응답 바디는 detail 래핑 없이 content 그대로 반환 ({message} / {error, details})
"""
import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from common.logger import get_logger

logger = get_logger("errors")


class ServiceException(HTTPException):
    """JSON 바디(content)를 그대로 응답하는 HTTP 예외 기본 클래스"""
    def __init__(self, status_code: int, content: Dict[str, Any]):
        super().__init__(status_code=status_code, detail=content)
        self.content = content


class NotFoundException(ServiceException):
    """404 에러 - 항목 없음"""
    def __init__(self, message: str = "Not found", key: str = "message"):
        super().__init__(status.HTTP_404_NOT_FOUND, {key: message})


class BadRequestException(ServiceException):
    """400 에러 - 잘못된 요청"""
    def __init__(self, message: str = "Bad request", key: str = "error"):
        super().__init__(status.HTTP_400_BAD_REQUEST, {key: message})


class NotAuthenticatedException(ServiceException):
    """401 에러 - 인증 실패"""
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, {"error": message})


class ConflictException(ServiceException):
    """409 에러 - 중복 데이터"""
    def __init__(self, message: str = "Conflict", key: str = "error"):
        super().__init__(status.HTTP_409_CONFLICT, {key: message})


class InternalServerErrorException(ServiceException):
    """500 에러 - 저장소/서버 오류"""
    def __init__(
        self,
        message: str = "Internal server error",
        key: str = "error",
        details: Optional[str] = None,
        details_key: str = "details",
    ):
        content: Dict[str, Any] = {key: message}
        if details is not None:
            content[details_key] = details
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, content)


async def service_exception_handler(request: Request, exc: ServiceException):
    return JSONResponse(status_code=exc.status_code, content=exc.content)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"요청 검증 실패: {request.method} {request.url.path}, errors={exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": jsonable_errors(exc)},
    )


async def catch_all_exceptions(request: Request, exc: Exception):
    logger.error("=== [Global Exception] ===")
    logger.error(f"Exception: {repr(exc)}")
    logger.error(f"Traceback: {traceback.format_exc()}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """pydantic 에러 목록에서 직렬화 불가능한 ctx 값을 문자열로 변환"""
    errors = []
    for err in exc.errors():
        item = {k: v for k, v in err.items() if k not in ("ctx", "url")}
        if "ctx" in err:
            item["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        if "input" in item and not isinstance(item["input"], (str, int, float, bool, type(None), list, dict)):
            item["input"] = str(item["input"])
        errors.append(item)
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """서비스 앱 공통 예외 핸들러 등록"""
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, catch_all_exceptions)


def parse_path_id(value: str, message: str, key: str = "error") -> int:
    """
    경로 파라미터 정수 변환
    - 숫자가 아니면 엔드포인트별 메시지로 400 (예: {message: "Invalid recipe ID"})
    """
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadRequestException(message, key=key)
