"""
서비스 공통 HTTP 미들웨어
- CORS, 요청/응답 로깅
- Prometheus 요청 지연 히스토그램 + GET /metrics (기본 프로세스 메트릭 포함)
"""
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Histogram, generate_latest

from common.logger import get_logger, log_with_context

logger = get_logger("http")

# 기본 레지스트리는 프로세스 전역이라 모듈 로드 시 한 번만 생성
HTTP_REQUEST_DURATION_MS = Histogram(
    "http_request_duration_ms",
    "Duration of HTTP requests in ms",
    labelnames=["method", "route", "code"],
    buckets=[50, 100, 300, 500, 1000, 3000],
)


def route_label(request: Request) -> str:
    """매칭된 라우트 템플릿 (/recipes/{recipe_id}), 매칭 실패 시 실제 경로"""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


async def metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def register_common_middleware(app: FastAPI, cors_origins) -> None:
    """CORS + 요청/응답 로깅 + 메트릭 미들웨어 등록"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        logger.info(f"Incoming request: {request.method} {request.url}")
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        HTTP_REQUEST_DURATION_MS.labels(
            method=request.method,
            route=route_label(request),
            code=str(response.status_code),
        ).observe(duration_ms)

        log_with_context(
            logger,
            "info",
            f"Response status: {response.status_code}",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        return response

    app.add_api_route("/metrics", metrics, methods=["GET"], include_in_schema=False)
