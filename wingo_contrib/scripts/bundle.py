"""
스크립트 번들 모듈

원격 스크립트 디렉토리 전체를 메모리에 올린 표현입니다.
스크립트 파일, README, 설정 파일과 그 외 파일들을 포함합니다.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..exceptions import CorruptRepositoryException, LocalFilesystemException
from ..utils.logging import get_logger

logger = get_logger(__name__)

README_NAME = "README.md"


def config_name(script_name: str) -> str:
    """스크립트 설정 파일의 이름"""
    return f"{script_name}.cfg"


@dataclass
class ScriptBundle:
    """
    메모리에 내려받은 스크립트

    files 에는 내려받은 파일만 들어 있고, 원격에 목록은 있으나
    내려받지 못한 파일 이름은 missing 에 기록됩니다.
    """

    name: str
    files: dict[str, bytes] = field(default_factory=dict)
    missing: frozenset = frozenset()
    repository: str = "wingo-contrib"

    def __post_init__(self):
        if self.files.get(README_NAME) is None:
            raise CorruptRepositoryException(self.name, README_NAME, self.repository)
        if self.files.get(self.name) is None:
            raise CorruptRepositoryException(self.name, self.name, self.repository)

    @property
    def readme(self) -> bytes:
        return self.files[README_NAME]

    @property
    def source(self) -> bytes:
        return self.files[self.name]

    @property
    def config_name(self) -> str:
        return config_name(self.name)

    @property
    def config(self) -> Optional[bytes]:
        return self.files.get(self.config_name)

    @property
    def file_names(self) -> list[str]:
        return sorted(self.files)

    def copy_file(self, file_name: str, dest) -> None:
        """
        메모리의 파일을 dest 에 기록합니다 (기존 파일은 덮어씀)

        Raises:
            KeyError: 번들에 없는 파일 이름일 때
            LocalFilesystemException: 파일 생성 또는 쓰기 실패 시
        """
        contents = self.files[file_name]
        dest = Path(dest)
        try:
            with open(dest, "wb") as f:
                f.write(contents)
        except OSError as e:
            raise LocalFilesystemException(
                str(dest), f"파일을 기록할 수 없습니다: {e}"
            ) from e
        logger.debug(f"파일 복사: {file_name} -> {dest}")
