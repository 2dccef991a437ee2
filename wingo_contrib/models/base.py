"""
기본 데이터 모델 모듈

GitHub 트리 API 응답 구조를 정의합니다.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .enums import TreeEntryType


class TreeEntry(BaseModel):
    """원격 저장소의 항목 (스크립트 파일이 아닐 수도 있음)"""

    path: str = Field(
        ...,
        description="저장소 루트 기준 경로",
        min_length=1
    )
    type: TreeEntryType = Field(
        default=TreeEntryType.BLOB,
        description="항목 타입"
    )
    mode: Optional[str] = Field(
        default=None,
        description="파일 모드"
    )
    sha: Optional[str] = Field(
        default=None,
        description="객체 SHA"
    )
    size: Optional[int] = Field(
        default=None,
        description="파일 크기 (blob만 해당)",
        ge=0
    )
    url: Optional[str] = Field(
        default=None,
        description="객체 API URL"
    )

    @property
    def is_blob(self) -> bool:
        return self.type == TreeEntryType.BLOB

    @property
    def is_script(self) -> bool:
        """스크립트 디렉토리 바로 아래의 항목인지 여부"""
        return self.path.count("/") == 1

    def split(self) -> tuple[str, str]:
        """(스크립트 이름, 파일 이름) 반환"""
        script_name, _, file_name = self.path.rpartition("/")
        return script_name, file_name


class GitHubTree(BaseModel):
    """저장소 전체 트리 (recursive=1 응답)"""

    sha: Optional[str] = Field(
        default=None,
        description="트리 SHA"
    )
    url: Optional[str] = Field(
        default=None,
        description="트리 API URL"
    )
    tree: List[TreeEntry] = Field(
        default_factory=list,
        description="저장소의 모든 항목"
    )
    truncated: bool = Field(
        default=False,
        description="응답이 잘렸는지 여부"
    )
