"""
공통 유틸리티 함수 모듈

파일 권한 변경과 출력 형식화 등 공통 헬퍼 함수들을 제공합니다.
"""

import os
import stat
from pathlib import Path
from typing import Union

from ..exceptions import LocalFilesystemException
from ..utils.logging import get_logger

logger = get_logger(__name__)

EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def make_executable(file_path: Union[str, Path]) -> int:
    """
    소유자, 그룹, 기타 사용자의 실행 권한을 추가합니다

    기존 읽기/쓰기 권한은 그대로 유지되고 빠진 실행 비트만 추가됩니다.

    Args:
        file_path: 파일 경로

    Returns:
        int: 변경된 권한 비트

    Raises:
        LocalFilesystemException: 파일 상태 조회 또는 권한 변경 실패 시
    """
    file_path = Path(file_path)

    try:
        perms = stat.S_IMODE(file_path.stat().st_mode)
    except OSError as e:
        raise LocalFilesystemException(str(file_path), str(e)) from e

    new_perms = perms | EXECUTE_BITS
    if new_perms == perms:
        return perms

    try:
        os.chmod(file_path, new_perms)
    except OSError as e:
        raise LocalFilesystemException(
            str(file_path), f"실행 권한을 설정할 수 없습니다: {e}"
        ) from e

    logger.debug(f"실행 권한 설정: {file_path} ({perms:o} -> {new_perms:o})")
    return new_perms


def indent_text(text: str, prefix: str = "    ") -> str:
    """
    여러 줄 텍스트의 모든 줄 앞에 접두사를 붙입니다

    Args:
        text: 원본 텍스트
        prefix: 각 줄에 붙일 접두사

    Returns:
        str: 들여쓰기된 텍스트
    """
    return prefix + text.replace("\n", "\n" + prefix)
