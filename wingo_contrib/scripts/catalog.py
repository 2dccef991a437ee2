"""
원격 스크립트 카탈로그 모듈

원격 저장소 트리를 스크립트 이름별 파일 목록으로 정리합니다.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from ..models.base import GitHubTree, TreeEntry


@dataclass(frozen=True)
class RemoteCatalog:
    """
    원격 저장소의 스크립트 목록 스냅샷

    명령 실행마다 한 번 생성되며 이후 변경되지 않습니다.
    경로에 구분자가 정확히 하나 있는 항목만 스크립트 파일로 취급합니다.
    """

    scripts: Mapping[str, frozenset] = field(default_factory=dict)

    @classmethod
    def from_tree(cls, tree: GitHubTree) -> "RemoteCatalog":
        return cls.from_entries(tree.tree)

    @classmethod
    def from_entries(cls, entries: Iterable[TreeEntry]) -> "RemoteCatalog":
        files: dict[str, set[str]] = {}
        for entry in entries:
            if not entry.is_script:
                continue
            script_name, file_name = entry.split()
            names = files.setdefault(script_name, set())
            # 하위 디렉토리 항목은 스크립트 존재 여부에만 반영
            if entry.is_blob:
                names.add(file_name)

        return cls(MappingProxyType({name: frozenset(fs) for name, fs in files.items()}))

    def exists(self, script_name: str) -> bool:
        return script_name in self.scripts

    def list_script_names(self) -> list[str]:
        return sorted(self.scripts)

    def files(self, script_name: str) -> list[str]:
        """스크립트 디렉토리의 파일 이름 목록 (정렬됨)"""
        return sorted(self.scripts.get(script_name, ()))

    def __len__(self) -> int:
        return len(self.scripts)
