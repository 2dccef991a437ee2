"""
스크립트 관리 오케스트레이터 모듈

설치, 업그레이드, 목록, 검색, 정보 조회 기능을 통합하는 메인 인터페이스를 제공합니다.
"""

import asyncio
from pathlib import Path
from typing import Optional

from ..config.settings import Settings
from ..exceptions import (
    CorruptRepositoryException,
    LocalFilesystemException,
    ScriptAlreadyInstalledException,
    ScriptNotFoundException,
    ScriptNotInstalledException,
)
from ..models.enums import CopyAction
from ..utils.helpers import make_executable
from ..utils.logging import get_logger
from .bundle import README_NAME
from .catalog import RemoteCatalog
from .local import LocalInstallation
from .metadata import ScriptDescription, read_description
from .reconcile import CopyPlan, ReconciliationPolicy
from .repository import GitHubRepository, RepositoryBase

logger = get_logger(__name__)


class ContribManager:
    """contrib 스크립트 관리 오케스트레이터"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        repository: Optional[RepositoryBase] = None,
        scripts_dir: Optional[Path] = None,
    ):
        """
        관리자 초기화

        Args:
            settings: 시스템 설정 (None이면 기본 설정 사용)
            repository: 원격 저장소 (None이면 설정에 따라 생성)
            scripts_dir: 로컬 스크립트 디렉토리 (None이면 처음 필요할 때 설정에서 탐색)
        """
        if settings is None:
            from ..config.settings import get_settings
            settings = get_settings()

        self.settings = settings
        self.logger = logger
        self.repository = repository or self._create_repository()
        self.policy = ReconciliationPolicy()
        self._scripts_dir = Path(scripts_dir) if scripts_dir else None

    def _create_repository(self) -> RepositoryBase:
        """설정에 따른 저장소 인스턴스 생성"""
        return GitHubRepository(self.settings)

    @property
    def scripts_dir(self) -> Path:
        if self._scripts_dir is None:
            self._scripts_dir = self.settings.resolve_scripts_dir()
        return self._scripts_dir

    async def _load_trees(self) -> tuple[RemoteCatalog, LocalInstallation]:
        catalog = await self.repository.fetch_catalog()
        local = LocalInstallation.scan(self.scripts_dir)
        return catalog, local

    async def install(self, script_name: str) -> CopyPlan:
        """
        스크립트 설치

        Args:
            script_name: 스크립트 이름

        Returns:
            CopyPlan: 실행된 복사 계획

        Raises:
            ScriptNotFoundException: 원격 저장소에 없는 스크립트일 때
            ScriptAlreadyInstalledException: 이미 설치된 스크립트일 때
            LocalFilesystemException: 디렉토리 생성이나 파일 기록 실패 시
        """
        catalog, local = await self._load_trees()
        if not catalog.exists(script_name):
            raise ScriptNotFoundException(script_name, self.repository.name)
        if local.exists(script_name):
            raise ScriptAlreadyInstalledException(script_name)

        bundle = await self.repository.download_bundle(catalog, script_name)

        script_dir = self.scripts_dir / script_name
        try:
            script_dir.mkdir()
        except OSError as e:
            raise LocalFilesystemException(
                str(script_dir), f"디렉토리를 만들 수 없습니다: {e}"
            ) from e

        plan = self.policy.plan(bundle, script_dir, CopyAction.COPY_ALL)
        plan.execute(bundle)
        make_executable(script_dir / script_name)

        self.logger.info(f"스크립트 설치 완료: {script_name} -> {script_dir}")
        return plan

    async def upgrade(self, script_name: str, skip_config: bool = False) -> CopyPlan:
        """
        설치된 스크립트 업그레이드

        로컬과 원격 설정 파일이 모두 있고 서로 다르면 아무 파일도 기록하지 않고
        중단된 계획을 반환합니다. 수동 조치 안내문은 CopyPlan.conflict_notice() 로 얻습니다.

        Args:
            script_name: 스크립트 이름
            skip_config: 로컬 설정 파일을 건드리지 않고 나머지만 업그레이드할지 여부

        Returns:
            CopyPlan: 실행된 (또는 중단된) 복사 계획

        Raises:
            ScriptNotFoundException: 원격 저장소에 없는 스크립트일 때
            ScriptNotInstalledException: 설치되지 않은 스크립트일 때
        """
        catalog, local = await self._load_trees()
        if not catalog.exists(script_name):
            raise ScriptNotFoundException(script_name, self.repository.name)
        installed = local.get(script_name)
        if installed is None:
            raise ScriptNotInstalledException(script_name)

        bundle = await self.repository.download_bundle(catalog, script_name)
        remote_config = bundle.config

        local_has_config = False
        local_config = None
        if not skip_config:
            local_has_config = installed.has_config()
            # 비교가 필요할 때만 로컬 설정을 읽음
            if local_has_config and remote_config is not None:
                local_config = installed.read_config()

        action = self.policy.decide(local_has_config, local_config, remote_config, skip_config)
        plan = self.policy.plan(bundle, installed.path, action)

        if plan.aborted:
            # 안내문 출력은 호출자 담당
            self.logger.debug(f"설정 파일 충돌로 업그레이드 중단: {plan.conflict_path}")
            return plan

        plan.execute(bundle)
        self.logger.info(f"스크립트 업그레이드 완료: {script_name} ({action.value})")
        return plan

    async def list_installed(self) -> list[str]:
        """
        원격 저장소에도 존재하는 설치된 스크립트 목록

        Returns:
            로컬 디렉토리 나열 순서의 스크립트 이름 목록
        """
        catalog, local = await self._load_trees()
        return [script.script_name for script in local if catalog.exists(script.script_name)]

    async def search(self, query: str = "") -> list[ScriptDescription]:
        """
        설명으로 스크립트 검색

        모든 스크립트의 README를 동시에 내려받은 뒤 이름순으로 정렬하고
        설명에 검색어가 포함된 항목만 반환합니다.

        Args:
            query: 검색어 (빈 문자열이면 모든 스크립트)

        Returns:
            이름순으로 정렬된 검색 결과
        """
        catalog = await self.repository.fetch_catalog()
        semaphore = asyncio.Semaphore(self.settings.search_concurrency)

        async def describe(script_name: str) -> ScriptDescription:
            async with semaphore:
                readme = await self.repository.download_file(script_name, README_NAME)
            description = read_description(readme)
            if description is None:
                self.logger.debug(f"README에 설명이 없습니다: {script_name}")
            return ScriptDescription(script_name, description)

        results = await asyncio.gather(
            *(describe(name) for name in catalog.list_script_names())
        )
        results = sorted(results, key=lambda result: result.name)

        matched = [result for result in results if result.matches(query)]
        self.logger.debug(f"검색 결과: '{query}' -> {len(matched)}/{len(results)}")
        return matched

    async def info(self, script_name: str) -> str:
        """
        스크립트 README 조회

        Raises:
            ScriptNotFoundException: 원격 저장소에 없는 스크립트일 때
            CorruptRepositoryException: README를 내려받을 수 없을 때
        """
        catalog = await self.repository.fetch_catalog()
        if not catalog.exists(script_name):
            raise ScriptNotFoundException(script_name, self.repository.name)

        readme = await self.repository.download_file(script_name, README_NAME)
        if readme is None:
            raise CorruptRepositoryException(script_name, README_NAME, self.repository.name)
        return readme.decode("utf-8", errors="replace")

    async def close(self) -> None:
        """리소스 정리"""
        if isinstance(self.repository, GitHubRepository):
            await self.repository.close()

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        await self.close()
