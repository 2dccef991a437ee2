"""
열거형 정의 모듈

wingo-contrib에서 사용되는 상수 값들을 열거형으로 정의합니다.
"""

from enum import Enum


class CopyAction(Enum):
    """업그레이드 시 파일 복사 방식 열거형"""
    COPY_ALL = "copy_all"
    COPY_ALL_BUT_CONFIG = "copy_all_but_config"
    ABORT = "abort"


class TreeEntryType(Enum):
    """GitHub 트리 항목 타입 열거형"""
    BLOB = "blob"
    TREE = "tree"
    COMMIT = "commit"
