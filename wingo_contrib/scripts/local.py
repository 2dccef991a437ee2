"""
로컬 설치 목록 모듈

로컬 스크립트 디렉토리에 설치된 스크립트를 조회합니다.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..exceptions import LocalFilesystemException
from ..utils.logging import get_logger
from .bundle import config_name

logger = get_logger(__name__)


@dataclass(frozen=True)
class LocalScript:
    """로컬 파일 시스템에 설치된 스크립트"""

    script_name: str
    path: Path

    @property
    def config_path(self) -> Path:
        return self.path / config_name(self.script_name)

    def has_config(self) -> bool:
        """로컬 설정 파일 존재 여부"""
        return self.config_path.exists()

    def read_config(self) -> bytes:
        """
        로컬 설정 파일 내용을 읽습니다

        Raises:
            LocalFilesystemException: 설정 파일을 읽을 수 없을 때
        """
        try:
            return self.config_path.read_bytes()
        except OSError as e:
            raise LocalFilesystemException(
                str(self.config_path), f"설정 파일을 읽을 수 없습니다: {e}"
            ) from e


class LocalInstallation:
    """로컬 스크립트 디렉토리의 스냅샷 (하위 디렉토리 하나당 스크립트 하나)"""

    def __init__(self, scripts_dir: Path, scripts: list[LocalScript]):
        self.scripts_dir = scripts_dir
        self._scripts = scripts

    @classmethod
    def scan(cls, scripts_dir) -> "LocalInstallation":
        """
        스크립트 디렉토리를 탐색합니다

        Args:
            scripts_dir: 로컬 스크립트 디렉토리

        Returns:
            LocalInstallation: 디렉토리 나열 순서를 유지한 설치 목록

        Raises:
            LocalFilesystemException: 디렉토리를 열거나 나열할 수 없을 때
        """
        scripts_dir = Path(scripts_dir)
        scripts = []
        try:
            with os.scandir(scripts_dir) as it:
                for entry in it:
                    if entry.is_dir():
                        scripts.append(LocalScript(entry.name, scripts_dir / entry.name))
        except OSError as e:
            raise LocalFilesystemException(str(scripts_dir), str(e)) from e

        logger.debug(f"로컬 스크립트 {len(scripts)}개 발견: {scripts_dir}")
        return cls(scripts_dir, scripts)

    def exists(self, script_name: str) -> bool:
        return self.get(script_name) is not None

    def get(self, script_name: str) -> Optional[LocalScript]:
        for script in self._scripts:
            if script.script_name == script_name:
                return script
        return None

    def list(self) -> list[LocalScript]:
        return list(self._scripts)

    def __iter__(self) -> Iterator[LocalScript]:
        return iter(self._scripts)

    def __len__(self) -> int:
        return len(self._scripts)
