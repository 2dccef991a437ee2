"""
스크립트 메타데이터 모듈

README.md 에서 스크립트 설명을 추출하고 검색 결과 모델을 제공합니다.
"""

from dataclasses import dataclass
from typing import Optional, Union

DESCRIPTION_HEADING = b"Description\n===========\n"
SECTION_BOUNDARY = b"\n\n\n"


@dataclass(frozen=True)
class ScriptDescription:
    """검색 결과 항목"""

    name: str
    description: Optional[str] = None

    def matches(self, query: str) -> bool:
        """
        설명에 검색어가 포함되어 있는지 확인 (대소문자 무시)

        빈 검색어는 모든 스크립트와 일치하고, 설명이 없는 스크립트는
        비어 있지 않은 검색어와 일치하지 않습니다.
        """
        if not query:
            return True
        if self.description is None:
            return False
        return query.lower() in self.description.lower()


def read_description(readme: Union[bytes, str, None]) -> Optional[str]:
    """
    README 에서 Description 섹션만 추출합니다

    Args:
        readme: README.md 내용

    Returns:
        Optional[str]: 앞뒤 공백을 제거한 설명. 제목이 없으면 None
    """
    if readme is None:
        return None
    if isinstance(readme, str):
        readme = readme.encode("utf-8")

    _, heading, rest = readme.partition(DESCRIPTION_HEADING)
    if not heading:
        return None

    section = rest.split(SECTION_BOUNDARY, 1)[0]
    return section.strip().decode("utf-8", errors="replace")
