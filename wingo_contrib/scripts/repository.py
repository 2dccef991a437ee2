"""
원격 스크립트 저장소 모듈

GitHub 저장소에서 트리 목록과 스크립트 파일을 내려받는 기능을 제공합니다.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

import aiohttp
from pydantic import ValidationError

from ..exceptions import ScriptNotFoundException, ScriptRepositoryException
from ..models.base import GitHubTree
from ..utils.logging import get_logger
from .bundle import ScriptBundle
from .catalog import RemoteCatalog

logger = get_logger(__name__)


class RepositoryBase(ABC):
    """저장소 기본 추상 클래스"""

    def __init__(self, settings):
        """저장소 기본 초기화"""
        self.settings = settings
        self.logger = logger

    @property
    def name(self) -> str:
        return self.settings.repository_name

    @abstractmethod
    async def fetch_catalog(self) -> RemoteCatalog:
        """
        저장소 전체 트리 조회 (추상 메서드)

        Returns:
            RemoteCatalog: 원격 스크립트 카탈로그

        Raises:
            ScriptRepositoryException: 목록을 가져오거나 해석할 수 없을 때
        """
        pass

    @abstractmethod
    async def download_file(self, script_name: str, file_name: str) -> Optional[bytes]:
        """
        스크립트 파일 하나 다운로드 (추상 메서드)

        Args:
            script_name: 스크립트 이름
            file_name: 파일 이름

        Returns:
            파일 내용 (파일이 없으면 None)
        """
        pass

    async def download_bundle(self, catalog: RemoteCatalog, script_name: str) -> ScriptBundle:
        """
        스크립트 디렉토리의 모든 파일 다운로드

        개별 파일이 없으면 missing 으로 기록하고 계속 진행합니다.
        README.md 나 스크립트 파일이 없으면 손상된 저장소로 간주합니다.

        Raises:
            ScriptNotFoundException: 카탈로그에 없는 스크립트일 때
            CorruptRepositoryException: 필수 파일이 없을 때
        """
        if not catalog.exists(script_name):
            raise ScriptNotFoundException(script_name, self.name)

        files: dict[str, bytes] = {}
        missing = set()
        for file_name in catalog.files(script_name):
            contents = await self.download_file(script_name, file_name)
            if contents is None:
                self.logger.warning(f"파일을 내려받지 못했습니다: {script_name}/{file_name}")
                missing.add(file_name)
            else:
                files[file_name] = contents

        self.logger.debug(f"스크립트 다운로드 완료: {script_name} (파일 {len(files)}개)")
        return ScriptBundle(script_name, files, frozenset(missing), self.name)


class GitHubRepository(RepositoryBase):
    """GitHub 저장소 클래스"""

    def __init__(self, settings):
        """
        GitHub 저장소 초기화

        Args:
            settings: 시스템 설정
        """
        super().__init__(settings)
        self.tree_url = settings.tree_url
        self.raw_prefix = settings.raw_prefix.rstrip('/')
        self.session = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """HTTP 세션 생성"""
        if not self.session:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.http_timeout),
                headers={
                    'User-Agent': self.settings.user_agent
                }
            )
        return self.session

    async def fetch_catalog(self) -> RemoteCatalog:
        """GitHub 트리 API로 저장소 전체 항목 조회"""
        session = await self._get_session()

        try:
            async with session.get(self.tree_url) as response:
                if response.status >= 400:
                    raise ScriptRepositoryException(
                        self.name, f"트리 조회 실패: HTTP {response.status} ({self.tree_url})"
                    )
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ScriptRepositoryException(self.name, f"트리 조회 오류: {e}") from e
        except ValueError as e:
            raise ScriptRepositoryException(self.name, f"트리 응답 해석 오류: {e}") from e

        try:
            tree = GitHubTree.model_validate(data)
        except ValidationError as e:
            raise ScriptRepositoryException(self.name, f"트리 응답 해석 오류: {e}") from e

        if tree.truncated:
            self.logger.warning("트리 응답이 잘렸습니다. 일부 스크립트가 누락될 수 있습니다")

        catalog = RemoteCatalog.from_tree(tree)
        self.logger.debug(f"원격 스크립트 {len(catalog)}개 조회 완료")
        return catalog

    async def download_file(self, script_name: str, file_name: str) -> Optional[bytes]:
        """raw URL에서 파일 다운로드 (HTTP 400 이상이면 None)"""
        session = await self._get_session()
        url = f"{self.raw_prefix}/{script_name}/{file_name}"

        try:
            async with session.get(url) as response:
                if response.status >= 400:
                    self.logger.debug(f"파일 없음: {url} (HTTP {response.status})")
                    return None
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ScriptRepositoryException(self.name, f"{url} 다운로드 오류: {e}") from e

    async def close(self) -> None:
        """세션 정리"""
        if self.session:
            await self.session.close()
            self.session = None
