"""
스크립트 관리 오케스트레이터 테스트

install / upgrade / list / search / info 흐름을 가짜 원격 저장소로 테스트합니다.
"""

import os
import stat

import pytest

from wingo_contrib.exceptions import (
    CorruptRepositoryException,
    LocalFilesystemException,
    ScriptAlreadyInstalledException,
    ScriptNotFoundException,
    ScriptNotInstalledException,
)
from wingo_contrib.models.enums import CopyAction
from wingo_contrib.scripts.manager import ContribManager
from wingo_contrib.scripts.repository import GitHubRepository


def snapshot(directory):
    """디렉토리 아래 모든 파일의 (상대 경로 -> 내용)"""
    result = {}
    for root, dirs, files in os.walk(directory):
        for name in dirs:
            result[os.path.relpath(os.path.join(root, name), directory)] = None
        for name in files:
            path = os.path.join(root, name)
            with open(path, "rb") as f:
                result[os.path.relpath(path, directory)] = f.read()
    return result


class TestInstall:
    """설치 테스트"""

    @pytest.mark.asyncio
    async def test_install_copies_all_files(self, make_manager, sample_scripts, scripts_dir):
        """모든 원격 파일을 복사하고 스크립트를 실행 가능하게 설정"""
        manager = make_manager(sample_scripts)

        plan = await manager.install("hello")

        script_dir = scripts_dir / "hello"
        assert plan.action == CopyAction.COPY_ALL
        assert sorted(p.name for p in script_dir.iterdir()) == ["README.md", "hello", "hello.cfg"]
        for name, contents in sample_scripts["hello"].items():
            assert (script_dir / name).read_bytes() == contents

        mode = stat.S_IMODE((script_dir / "hello").stat().st_mode)
        assert mode & 0o111 == 0o111

    @pytest.mark.asyncio
    async def test_install_unknown_script(self, make_manager, sample_scripts, scripts_dir):
        """원격에 없는 스크립트는 파일 시스템을 건드리지 않고 실패"""
        manager = make_manager(sample_scripts)

        with pytest.raises(ScriptNotFoundException) as exc_info:
            await manager.install("nope")

        assert exc_info.value.script_name == "nope"
        assert list(scripts_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_install_already_installed(self, make_manager, sample_scripts, scripts_dir):
        """이미 설치된 스크립트는 기존 파일을 바꾸지 않고 실패"""
        script_dir = scripts_dir / "hello"
        script_dir.mkdir()
        (script_dir / "hello").write_bytes(b"old")
        (script_dir / "hello.cfg").write_bytes(b"mine")
        before = snapshot(scripts_dir)
        manager = make_manager(sample_scripts)

        with pytest.raises(ScriptAlreadyInstalledException):
            await manager.install("hello")

        assert snapshot(scripts_dir) == before

    @pytest.mark.asyncio
    async def test_install_directory_blocked_by_file(self, make_manager, sample_scripts, scripts_dir):
        """같은 이름의 파일이 있으면 디렉토리 생성 실패"""
        (scripts_dir / "hello").write_bytes(b"a file, not a directory")
        manager = make_manager(sample_scripts)

        with pytest.raises(LocalFilesystemException):
            await manager.install("hello")

    @pytest.mark.asyncio
    async def test_install_skips_absent_optional_file(self, make_manager, sample_scripts, scripts_dir):
        """받지 못한 선택 파일은 건너뜀"""
        manager = make_manager(sample_scripts, missing=[("clock", "icon.png")])

        plan = await manager.install("clock")

        assert plan.file_names == ["README.md", "clock"]
        assert not (scripts_dir / "clock" / "icon.png").exists()

    @pytest.mark.asyncio
    async def test_install_corrupt_script(self, make_manager, sample_scripts, scripts_dir):
        """필수 파일이 없으면 손상된 저장소 오류"""
        del sample_scripts["clock"]["README.md"]
        manager = make_manager(sample_scripts)

        with pytest.raises(CorruptRepositoryException):
            await manager.install("clock")

        assert not (scripts_dir / "clock").exists()


class TestUpgrade:
    """업그레이드 테스트"""

    @pytest.fixture
    def installed(self, scripts_dir, sample_scripts):
        """이전 버전의 hello 가 설치된 상태"""
        script_dir = scripts_dir / "hello"
        script_dir.mkdir()
        (script_dir / "hello").write_bytes(b"#!/bin/sh\necho old\n")
        (script_dir / "README.md").write_bytes(b"old readme")
        (script_dir / "hello.cfg").write_bytes(sample_scripts["hello"]["hello.cfg"])
        return script_dir

    @pytest.mark.asyncio
    async def test_upgrade_unknown_script(self, make_manager, sample_scripts, scripts_dir):
        """원격에 없는 스크립트는 파일 시스템을 건드리지 않고 실패"""
        (scripts_dir / "gone").mkdir()
        before = snapshot(scripts_dir)
        manager = make_manager(sample_scripts)

        with pytest.raises(ScriptNotFoundException):
            await manager.upgrade("gone")

        assert snapshot(scripts_dir) == before

    @pytest.mark.asyncio
    async def test_upgrade_not_installed(self, make_manager, sample_scripts, scripts_dir):
        """설치되지 않은 스크립트는 디렉토리를 만들지 않고 실패"""
        manager = make_manager(sample_scripts)

        with pytest.raises(ScriptNotInstalledException):
            await manager.upgrade("hello")

        assert not (scripts_dir / "hello").exists()

    @pytest.mark.asyncio
    async def test_upgrade_identical_config(self, make_manager, sample_scripts, installed):
        """설정 파일이 같으면 전부 덮어씀"""
        manager = make_manager(sample_scripts)

        plan = await manager.upgrade("hello")

        assert plan.action == CopyAction.COPY_ALL
        assert (installed / "hello").read_bytes() == sample_scripts["hello"]["hello"]
        assert (installed / "README.md").read_bytes() == sample_scripts["hello"]["README.md"]

    @pytest.mark.asyncio
    async def test_upgrade_without_local_config(self, make_manager, sample_scripts, installed):
        """로컬 설정 파일이 없으면 원격 설정 파일도 복사"""
        (installed / "hello.cfg").unlink()
        manager = make_manager(sample_scripts)

        plan = await manager.upgrade("hello")

        assert plan.action == CopyAction.COPY_ALL
        assert (installed / "hello.cfg").read_bytes() == sample_scripts["hello"]["hello.cfg"]

    @pytest.mark.asyncio
    async def test_upgrade_without_remote_config(self, make_manager, sample_scripts, installed):
        """원격 설정 파일이 없으면 로컬 설정 파일은 그대로 두고 나머지 복사"""
        (installed / "hello.cfg").write_bytes(b"my edits\n")
        del sample_scripts["hello"]["hello.cfg"]
        manager = make_manager(sample_scripts)

        plan = await manager.upgrade("hello")

        assert plan.action == CopyAction.COPY_ALL
        assert (installed / "hello.cfg").read_bytes() == b"my edits\n"
        assert (installed / "hello").read_bytes() == sample_scripts["hello"]["hello"]

    @pytest.mark.asyncio
    async def test_upgrade_config_conflict_aborts(self, make_manager, sample_scripts, installed):
        """설정 파일이 다르면 아무것도 기록하지 않고 충돌 경로를 담은 계획 반환"""
        (installed / "hello.cfg").write_bytes(b"my edits\n")
        before = snapshot(installed)
        manager = make_manager(sample_scripts)

        plan = await manager.upgrade("hello")

        assert plan.aborted
        assert plan.entries == ()
        assert plan.conflict_path == installed / "hello.cfg"
        assert snapshot(installed) == before
        assert str(installed / "hello.cfg") in plan.conflict_notice()

    @pytest.mark.asyncio
    async def test_upgrade_skip_config(self, make_manager, sample_scripts, installed):
        """skip-config 이면 로컬 설정 파일을 건드리지 않음"""
        (installed / "hello.cfg").write_bytes(b"my edits\n")
        manager = make_manager(sample_scripts)

        plan = await manager.upgrade("hello", skip_config=True)

        assert plan.action == CopyAction.COPY_ALL_BUT_CONFIG
        assert (installed / "hello.cfg").read_bytes() == b"my edits\n"
        assert (installed / "hello").read_bytes() == sample_scripts["hello"]["hello"]

    @pytest.mark.asyncio
    async def test_upgrade_skip_config_is_idempotent(self, make_manager, sample_scripts, installed):
        """같은 원격 내용으로 두 번 업그레이드해도 결과가 같음"""
        (installed / "hello.cfg").write_bytes(b"my edits\n")

        await make_manager(sample_scripts).upgrade("hello", skip_config=True)
        first = snapshot(installed)
        await make_manager(sample_scripts).upgrade("hello", skip_config=True)

        assert snapshot(installed) == first

    @pytest.mark.asyncio
    async def test_upgrade_skip_config_does_not_read_local_config(self, make_manager, sample_scripts, installed, monkeypatch):
        """skip-config 이면 로컬 설정 파일을 읽지 않음"""
        def fail(self):
            raise AssertionError("read_config should not be called")

        monkeypatch.setattr("wingo_contrib.scripts.local.LocalScript.read_config", fail)
        manager = make_manager(sample_scripts)

        plan = await manager.upgrade("hello", skip_config=True)

        assert not plan.aborted


class TestListAndSearch:
    """목록 및 검색 테스트"""

    @pytest.mark.asyncio
    async def test_list_excludes_orphans(self, make_manager, sample_scripts, scripts_dir):
        """원격에서 삭제된 스크립트 디렉토리는 목록에 없음"""
        for name in ("hello", "orphan", "clock"):
            (scripts_dir / name).mkdir()
        (scripts_dir / "stray.txt").write_text("x")
        manager = make_manager(sample_scripts)

        installed = await manager.list_installed()

        assert sorted(installed) == ["clock", "hello"]

    @pytest.mark.asyncio
    async def test_list_empty(self, make_manager, sample_scripts):
        assert await make_manager(sample_scripts).list_installed() == []

    @pytest.mark.asyncio
    async def test_search_all(self, make_manager, sample_scripts):
        """빈 검색어는 모든 스크립트를 이름순으로 반환"""
        results = await make_manager(sample_scripts).search("")

        assert [r.name for r in results] == ["clock", "hello"]
        assert results[1].description == "Says hello to the\nWingo prompt."

    @pytest.mark.asyncio
    async def test_search_case_insensitive(self, make_manager, sample_scripts):
        """대소문자 구분 없이 설명에서 검색"""
        results = await make_manager(sample_scripts).search("Time")

        assert [r.name for r in results] == ["clock"]

    @pytest.mark.asyncio
    async def test_search_no_match(self, make_manager, sample_scripts):
        assert await make_manager(sample_scripts).search("nothing like this") == []

    @pytest.mark.asyncio
    async def test_search_malformed_readme(self, make_manager, sample_scripts):
        """설명 제목이 없는 README 는 검색어와 일치하지 않지만 오류도 아님"""
        sample_scripts["clock"]["README.md"] = b"# clock\n\nShows the time.\n"
        manager = make_manager(sample_scripts)

        assert [r.name for r in await manager.search("time")] == []
        all_results = await manager.search("")
        assert [r.name for r in all_results] == ["clock", "hello"]
        assert all_results[0].description is None

    @pytest.mark.asyncio
    async def test_search_order_is_independent_of_fetch_order(self, make_manager, sample_scripts):
        """README 를 받는 순서와 관계없이 이름순"""
        for name in ("zulu", "alpha", "mike"):
            sample_scripts[name] = {
                name: b"#!/bin/sh\n",
                "README.md": f"Description\n===========\n{name} script\n".encode(),
            }

        results = await make_manager(sample_scripts).search("script")

        assert [r.name for r in results] == ["alpha", "mike", "zulu"]


class TestInfo:
    """정보 조회 테스트"""

    @pytest.mark.asyncio
    async def test_info_returns_readme(self, make_manager, sample_scripts):
        readme = await make_manager(sample_scripts).info("clock")

        assert readme == sample_scripts["clock"]["README.md"].decode()

    @pytest.mark.asyncio
    async def test_info_unknown_script(self, make_manager, sample_scripts):
        with pytest.raises(ScriptNotFoundException):
            await make_manager(sample_scripts).info("nope")

    @pytest.mark.asyncio
    async def test_info_missing_readme(self, make_manager, sample_scripts):
        manager = make_manager(sample_scripts, missing=[("clock", "README.md")])

        with pytest.raises(CorruptRepositoryException):
            await manager.info("clock")


class TestManagerLifecycle:
    """관리자 생성과 정리 테스트"""

    def test_default_repository(self, settings):
        """저장소를 지정하지 않으면 GitHub 저장소 사용"""
        manager = ContribManager(settings)

        assert isinstance(manager.repository, GitHubRepository)

    def test_scripts_dir_from_settings(self, settings, scripts_dir):
        """스크립트 디렉토리는 설정에서 탐색"""
        manager = ContribManager(settings)

        assert manager.scripts_dir == scripts_dir.resolve()

    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self, make_manager, sample_scripts):
        manager = make_manager(sample_scripts)
        session = manager.repository.session

        async with manager:
            await manager.list_installed()

        assert session.closed
