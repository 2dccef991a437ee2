"""
설정 관리 모듈

환경 변수를 통한 시스템 설정과 로컬 스크립트 디렉토리 탐색을 관리합니다.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from .. import __version__
from ..exceptions import ConfigurationException


class Settings(BaseSettings):
    """시스템 설정 관리 클래스"""

    # 원격 저장소 설정
    github_tree_url: str = Field(
        default="https://api.github.com/repos/wingowm/contrib",
        description="GitHub 저장소 API URL"
    )
    github_tree_params: str = Field(
        default="/git/trees/master?recursive=1",
        description="전체 트리 조회 경로 및 파라미터"
    )
    raw_prefix: str = Field(
        default="https://raw.github.com/wingowm/contrib/master",
        description="원본 파일 다운로드 URL 접두사"
    )
    repository_name: str = Field(
        default="wingo-contrib",
        description="메시지에 표시할 저장소 이름"
    )

    # 로컬 스크립트 디렉토리 설정
    scripts_dir: Optional[str] = Field(
        default=None,
        description="스크립트 설치 디렉토리 (지정하지 않으면 XDG 경로 탐색)"
    )
    xdg_suffix: str = Field(
        default="wingo",
        description="XDG 설정 디렉토리 하위 이름"
    )

    # HTTP 설정
    http_timeout: int = Field(
        default=30,
        description="HTTP 요청 타임아웃 (초)"
    )
    user_agent: str = Field(
        default=f"wingo-contrib/{__version__}",
        description="HTTP User-Agent 헤더"
    )
    search_concurrency: int = Field(
        default=8,
        description="검색 시 동시에 내려받을 README 수"
    )

    # 로깅 설정
    log_level: str = Field(
        default="INFO",
        description="로그 레벨"
    )
    log_format: str = Field(
        default="%(levelname)s: %(message)s",
        description="로그 포맷"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="로그 파일 경로"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        # 환경 변수 이름을 대문자로 변환
        case_sensitive = False

    @property
    def tree_url(self) -> str:
        """전체 트리 조회 URL"""
        return self.github_tree_url.rstrip("/") + self.github_tree_params

    def validate_configuration(self) -> None:
        """설정 유효성 검증"""
        for key in ("github_tree_url", "raw_prefix"):
            if not getattr(self, key):
                raise ConfigurationException(key.upper(), "저장소 URL이 필요합니다")

        if self.http_timeout <= 0:
            raise ConfigurationException("HTTP_TIMEOUT", "0보다 커야 합니다")

        if self.search_concurrency < 1:
            raise ConfigurationException("SEARCH_CONCURRENCY", "1 이상이어야 합니다")

    def xdg_config_dirs(self) -> list[Path]:
        """XDG 규칙에 따른 설정 디렉토리 후보 목록 (우선순위 순)"""
        config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
        config_dirs = os.environ.get("XDG_CONFIG_DIRS") or "/etc/xdg"

        candidates = [Path(config_home)]
        candidates.extend(Path(d) for d in config_dirs.split(os.pathsep) if d)
        return [d / self.xdg_suffix for d in candidates]

    def resolve_scripts_dir(self) -> Path:
        """
        로컬 스크립트 디렉토리 경로를 반환합니다

        Returns:
            Path: 존재하는 스크립트 디렉토리의 절대 경로

        Raises:
            ConfigurationException: 스크립트 디렉토리를 찾을 수 없을 때
        """
        if self.scripts_dir:
            path = Path(self.scripts_dir).expanduser()
            if not path.is_dir():
                raise ConfigurationException(
                    "SCRIPTS_DIR", f"디렉토리가 존재하지 않습니다: {path}"
                )
            return path.resolve()

        searched = []
        for config_dir in self.xdg_config_dirs():
            path = config_dir / "scripts"
            if path.is_dir():
                return path.resolve()
            searched.append(str(path))

        raise ConfigurationException(
            "SCRIPTS_DIR",
            f"로컬 스크립트 디렉토리를 찾을 수 없습니다: {', '.join(searched)}"
        )


@lru_cache()
def get_settings() -> Settings:
    """
    설정 인스턴스를 반환합니다 (싱글톤 패턴)

    Returns:
        Settings: 설정 인스턴스
    """
    settings = Settings()
    settings.validate_configuration()
    return settings
