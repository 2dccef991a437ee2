"""
공용 테스트 픽스처

aiohttp 세션을 대신하는 메모리 기반 가짜 세션과 샘플 원격 저장소를 제공합니다.
"""

import copy
import json
import logging

import pytest

from wingo_contrib.config.settings import Settings
from wingo_contrib.utils.logging import ROOT_LOGGER_NAME
from wingo_contrib.scripts.manager import ContribManager
from wingo_contrib.scripts.repository import GitHubRepository


def make_readme(title: str, description: str) -> bytes:
    return (
        f"{title}\n{'=' * len(title)}\n\n"
        f"Description\n===========\n{description}\n\n\n"
        "Usage\n=====\nRun it.\n"
    ).encode("utf-8")


SAMPLE_SCRIPTS = {
    "hello": {
        "hello": b"#!/bin/sh\necho hello\n",
        "README.md": make_readme("hello", "Says hello to the\nWingo prompt."),
        "hello.cfg": b"greeting = hi\n",
    },
    "clock": {
        "clock": b"#!/bin/sh\ndate\n",
        "README.md": make_readme("clock", "Shows the current TIME in a popup."),
        "icon.png": b"\x89PNG",
    },
}


class FakeResponse:
    """aiohttp 응답 대용"""

    def __init__(self, status: int = 200, body: bytes = b"", error: Exception = None):
        self.status = status
        self.body = body
        self.error = error

    async def __aenter__(self):
        if self.error is not None:
            raise self.error
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False

    async def read(self) -> bytes:
        return self.body

    async def json(self, content_type=None):
        return json.loads(self.body)


class FakeSession:
    """URL 별로 미리 정해진 응답을 돌려주는 aiohttp 세션 대용"""

    def __init__(self, routes: dict):
        self.routes = routes
        self.requested = []
        self.closed = False

    def get(self, url):
        self.requested.append(url)
        return self.routes.get(url, FakeResponse(404, b"Not Found"))

    async def close(self):
        self.closed = True


def build_routes(settings: Settings, scripts: dict, extra_paths=(), missing=()) -> dict:
    """
    샘플 스크립트로부터 트리 응답과 raw 파일 응답 구성

    Args:
        settings: URL 구성에 사용할 설정
        scripts: {스크립트 이름: {파일 이름: 내용}}
        extra_paths: 트리에만 추가할 경로 (예: 최상위 파일, 깊은 경로)
        missing: 트리에는 있지만 raw 다운로드가 404 인 (스크립트, 파일) 목록
    """
    tree = []
    routes = {}
    for script_name, files in scripts.items():
        tree.append({"path": script_name, "type": "tree", "mode": "040000"})
        for file_name, contents in files.items():
            tree.append({
                "path": f"{script_name}/{file_name}",
                "type": "blob",
                "mode": "100644",
                "size": len(contents),
            })
            if (script_name, file_name) not in missing:
                url = f"{settings.raw_prefix}/{script_name}/{file_name}"
                routes[url] = FakeResponse(200, contents)
    for path in extra_paths:
        tree.append({"path": path, "type": "blob", "mode": "100644"})

    payload = {"sha": "deadbeef", "url": settings.tree_url, "tree": tree, "truncated": False}
    routes[settings.tree_url] = FakeResponse(200, json.dumps(payload).encode("utf-8"))
    return routes


@pytest.fixture(autouse=True)
def reset_package_logger():
    """setup_logging 이 바꾼 패키지 로거 상태를 테스트마다 복원"""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def sample_scripts():
    """샘플 원격 스크립트 (테스트마다 새 사본)"""
    return copy.deepcopy(SAMPLE_SCRIPTS)


@pytest.fixture
def scripts_dir(tmp_path):
    """비어 있는 로컬 스크립트 디렉토리"""
    path = tmp_path / "scripts"
    path.mkdir()
    return path


@pytest.fixture
def settings(scripts_dir):
    """테스트용 설정"""
    return Settings(scripts_dir=str(scripts_dir), search_concurrency=2)


@pytest.fixture
def make_repository(settings):
    """가짜 세션을 사용하는 GitHubRepository 생성 함수"""

    def factory(scripts: dict, extra_paths=(), missing=(), routes: dict = None) -> GitHubRepository:
        repository = GitHubRepository(settings)
        if routes is None:
            routes = build_routes(settings, scripts, extra_paths, missing)
        repository.session = FakeSession(routes)
        return repository

    return factory


@pytest.fixture
def make_manager(settings, scripts_dir, make_repository):
    """가짜 저장소를 사용하는 ContribManager 생성 함수"""

    def factory(scripts: dict, **kwargs) -> ContribManager:
        return ContribManager(settings, repository=make_repository(scripts, **kwargs), scripts_dir=scripts_dir)

    return factory
