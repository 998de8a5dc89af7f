"""
업로드 이미지 정적 서빙 마운트
- lifespan 시점의 설정으로 마운트해서 업로드 경로와 서빙 경로가 항상 같은 디렉토리를 가리키게 함
- 같은 이름의 기존 마운트는 교체 (앱 재시작/테스트 재실행 시 중복 방지)
"""
import os

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from common.logger import get_logger

logger = get_logger("static")


def mount_upload_dir(app: FastAPI, url_prefix: str, directory: str, name: str) -> None:
    os.makedirs(directory, exist_ok=True)
    app.router.routes[:] = [
        route for route in app.router.routes if getattr(route, "name", None) != name
    ]
    app.mount(url_prefix.rstrip("/"), StaticFiles(directory=directory), name=name)
    logger.info(f"정적 파일 마운트: {url_prefix} -> {directory}")
