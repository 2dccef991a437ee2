"""
업그레이드 조정 모듈

로컬 설정 파일의 사용자 수정 내용을 잃지 않도록, 내려받은 스크립트의
어떤 파일을 덮어쓸 수 있는지 결정하고 그 복사 계획을 실행합니다.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..models.enums import CopyAction
from ..utils.logging import get_logger
from .bundle import ScriptBundle

logger = get_logger(__name__)


@dataclass(frozen=True)
class CopyPlan:
    """번들에서 디스크로 옮길 (파일 이름, 대상 경로) 목록"""

    action: CopyAction
    entries: tuple[tuple[str, Path], ...] = ()
    # 중단된 계획에서 충돌한 로컬 설정 파일
    conflict_path: Optional[Path] = None

    @property
    def aborted(self) -> bool:
        return self.action == CopyAction.ABORT

    @property
    def file_names(self) -> list[str]:
        return [file_name for file_name, _ in self.entries]

    def conflict_notice(self) -> str:
        """설정 파일 충돌로 중단되었을 때 사용자에게 보여줄 수동 조치 안내"""
        return (
            "수동 조치가 필요합니다!\n"
            f"설정 파일\n\n    {self.conflict_path}\n\n이(가) 원격 저장소의 사본과 다릅니다.\n"
            "로컬 설정 파일을 다른 위치로 옮긴 뒤 upgrade 명령을 다시 실행하고,\n"
            "이전 설정 내용을 새 설정 파일에 병합하세요.\n"
            "또는 '--skip-config' 옵션으로 업그레이드하세요."
        )

    def execute(self, bundle: ScriptBundle) -> int:
        """
        계획된 파일을 순서대로 기록합니다

        하나라도 실패하면 나머지는 건너뛰고 예외를 전파합니다.
        이미 기록된 파일은 되돌리지 않습니다.

        Returns:
            int: 기록한 파일 수
        """
        for file_name, dest in self.entries:
            bundle.copy_file(file_name, dest)
        if self.entries:
            logger.info(f"{bundle.name}: 파일 {len(self.entries)}개 기록 ({self.action.value})")
        return len(self.entries)


class ReconciliationPolicy:
    """로컬/원격 설정 파일을 비교해 복사 방식을 결정하는 정책"""

    @staticmethod
    def decide(
        local_has_config: bool,
        local_config: Optional[bytes],
        remote_config: Optional[bytes],
        skip_config: bool = False,
    ) -> CopyAction:
        """
        복사 방식 결정

        Args:
            local_has_config: 로컬 설정 파일 존재 여부
            local_config: 로컬 설정 파일 내용 (없으면 None)
            remote_config: 원격 설정 파일 내용 (없으면 None)
            skip_config: 설정 파일을 건드리지 않고 업그레이드할지 여부

        Returns:
            CopyAction: 결정된 복사 방식
        """
        if skip_config:
            return CopyAction.COPY_ALL_BUT_CONFIG

        # 잃을 것이 없거나 바뀐 것이 없으면 전부 덮어씀
        if not local_has_config or remote_config is None or local_config == remote_config:
            return CopyAction.COPY_ALL

        return CopyAction.ABORT

    @staticmethod
    def plan(bundle: ScriptBundle, script_dir, action: CopyAction) -> CopyPlan:
        """결정된 복사 방식에 따른 복사 계획 생성"""
        script_dir = Path(script_dir)
        if action == CopyAction.ABORT:
            return CopyPlan(action, conflict_path=script_dir / bundle.config_name)

        entries = []
        for file_name in bundle.file_names:
            if action == CopyAction.COPY_ALL_BUT_CONFIG and file_name == bundle.config_name:
                continue
            entries.append((file_name, script_dir / file_name))
        return CopyPlan(action, tuple(entries))
