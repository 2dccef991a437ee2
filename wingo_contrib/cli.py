"""
명령행 인터페이스 모듈

wingo-contrib 명령을 해석하고 ContribManager 로 전달합니다.
모든 예외는 이 모듈의 main() 에서 종료 코드로 변환됩니다.
"""

import argparse
import asyncio
import sys
from typing import Awaitable, Callable, NamedTuple, Optional, Sequence

from pydantic import ValidationError

from . import __version__
from .config.settings import Settings
from .exceptions import ConfigurationException, ContribException, UsageException
from .scripts.manager import ContribManager
from .utils.helpers import indent_text
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

PROG = "wingo-contrib"


class ContribArgumentParser(argparse.ArgumentParser):
    """잘못된 인자에 대해 사용법을 출력하고 UsageException 을 발생시키는 파서"""

    def error(self, message):
        self.print_usage(sys.stderr)
        raise UsageException(message)


async def cmd_install(manager: ContribManager, args: argparse.Namespace) -> int:
    await manager.install(args.script_name)
    return 0


async def cmd_upgrade(manager: ContribManager, args: argparse.Namespace) -> int:
    plan = await manager.upgrade(args.script_name, skip_config=args.skip_config)
    # 설정 충돌로 중단된 경우도 안내가 끝난 정상 종료로 취급
    if plan.aborted:
        print(plan.conflict_notice(), file=sys.stderr)
    return 0


async def cmd_list(manager: ContribManager, args: argparse.Namespace) -> int:
    for script_name in await manager.list_installed():
        print(script_name)
    return 0


async def cmd_search(manager: ContribManager, args: argparse.Namespace) -> int:
    query = " ".join(args.query)
    for result in await manager.search(query):
        print(f"{result.name}\n{indent_text(result.description or '')}\n")
    return 0


async def cmd_info(manager: ContribManager, args: argparse.Namespace) -> int:
    readme = await manager.info(args.script_name)
    print(f"\n{readme}")
    return 0


def _script_name_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("script_name", metavar="script-name", help="스크립트 이름")


def _upgrade_arguments(parser: argparse.ArgumentParser) -> None:
    _script_name_argument(parser)
    parser.add_argument(
        "--skip-config",
        action="store_true",
        help="로컬과 원격 설정 파일이 달라도 설정 파일을 제외하고 업그레이드합니다",
    )


def _search_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "query",
        nargs="*",
        help="설명에서 찾을 검색어 (비어 있으면 모든 스크립트 표시)",
    )


class Command(NamedTuple):
    """명령 테이블 항목"""
    handler: Callable[[ContribManager, argparse.Namespace], Awaitable[int]]
    description: str
    configure: Optional[Callable[[argparse.ArgumentParser], None]] = None


COMMANDS = {
    "install": Command(cmd_install, "wingo-contrib 에서 스크립트를 추가합니다", _script_name_argument),
    "upgrade": Command(cmd_upgrade, "스크립트를 업데이트합니다", _upgrade_arguments),
    "search": Command(cmd_search, "설명을 검색해 스크립트를 찾습니다", _search_arguments),
    "info": Command(cmd_info, "스크립트 정보를 보여줍니다", _script_name_argument),
    "list": Command(cmd_list, "설치된 wingo-contrib 스크립트를 나열합니다"),
}


def build_parser() -> ContribArgumentParser:
    """명령 테이블로부터 인자 파서 생성"""
    parser = ContribArgumentParser(
        prog=PROG,
        description="Wingo 윈도우 매니저의 contrib 스크립트를 관리하는 도구입니다.",
        epilog="스크립트를 제거하려면 해당 디렉토리를 삭제하면 됩니다.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--scripts-dir", help="로컬 스크립트 디렉토리 (기본값: XDG 설정 경로)")
    parser.add_argument("-v", "--verbose", action="store_true", help="디버그 로그 출력")

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True
    for name in sorted(COMMANDS):
        command = COMMANDS[name]
        subparser = subparsers.add_parser(name, help=command.description, description=command.description)
        if command.configure:
            command.configure(subparser)
        subparser.set_defaults(handler=command.handler)
    return parser


def print_overview(stream=None) -> None:
    """명령 없이 실행했을 때의 안내문 출력"""
    stream = stream or sys.stderr
    width = max(len(name) for name in COMMANDS)
    lines = [
        f"{PROG} 는 Wingo 윈도우 매니저의 contrib 스크립트를 관리하는 간단한 도구입니다.",
        "",
        "사용법:",
        "",
        f"    {PROG} command [arguments]",
        "",
        "명령 목록:",
        "",
    ]
    lines.extend(f"    {name:<{width}}    {COMMANDS[name].description}" for name in sorted(COMMANDS))
    lines.extend(["", "스크립트를 제거하려면 해당 디렉토리를 삭제하면 됩니다."])
    print("\n".join(lines), file=stream)


def load_settings(**overrides) -> Settings:
    """
    명령행 인자를 반영한 설정 생성 및 검증

    Raises:
        ConfigurationException: 환경 변수나 .env 값이 올바르지 않을 때
    """
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        error = e.errors()[0]
        config_key = ".".join(str(part) for part in error["loc"]).upper()
        raise ConfigurationException(config_key, error["msg"]) from e
    settings.validate_configuration()
    return settings


async def _dispatch(args: argparse.Namespace, settings: Settings) -> int:
    async with ContribManager(settings) as manager:
        return await args.handler(manager, args)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    메인 함수

    Args:
        argv: 명령행 인자 (None이면 sys.argv[1:])

    Returns:
        종료 코드 (0: 성공, 1: 실패)
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        print_overview()
        return 1

    try:
        args = build_parser().parse_args(argv)

        overrides = {}
        if args.scripts_dir:
            overrides["scripts_dir"] = args.scripts_dir
        if args.verbose:
            overrides["log_level"] = "DEBUG"
        settings = load_settings(**overrides)
        setup_logging(settings)

        return asyncio.run(_dispatch(args, settings))
    except ContribException as e:
        logger.error(e.message)
        return 1
    except Exception as e:
        logger.error(f"실행 중 오류 발생: {e}")
        return 1


def run() -> None:
    """콘솔 스크립트 진입점"""
    sys.exit(main())


if __name__ == "__main__":
    run()
