"""
스크립트 관리 모듈

원격 저장소에서 contrib 스크립트를 내려받아 설치하고 업그레이드하는 기능을 제공합니다.
"""

from .bundle import ScriptBundle, config_name
from .catalog import RemoteCatalog
from .local import LocalInstallation, LocalScript
from .manager import ContribManager
from .metadata import ScriptDescription, read_description
from .reconcile import CopyPlan, ReconciliationPolicy
from .repository import GitHubRepository, RepositoryBase

__all__ = [
    "ContribManager",
    "ScriptBundle",
    "RemoteCatalog",
    "LocalInstallation",
    "LocalScript",
    "CopyPlan",
    "ReconciliationPolicy",
    "ScriptDescription",
    "GitHubRepository",
    "RepositoryBase",
    "config_name",
    "read_description",
]
