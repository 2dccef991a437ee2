"""
데이터 모델 패키지

원격 저장소 응답과 복사 방식 등 핵심 데이터 구조를 정의합니다.
"""

from .base import GitHubTree, TreeEntry
from .enums import CopyAction, TreeEntryType

__all__ = [
    "GitHubTree",
    "TreeEntry",
    "CopyAction",
    "TreeEntryType",
]
