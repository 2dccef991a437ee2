"""
로깅 시스템 모듈

패키지 루트 로거(wingo_contrib) 아래에 한국어 레벨명을 쓰는 핸들러를 구성합니다.
진단 메시지는 stderr 로, 명령 결과는 CLI 가 stdout 으로 출력합니다.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

from ..config.settings import Settings
from ..exceptions import ConfigurationException, LocalFilesystemException

ROOT_LOGGER_NAME = "wingo_contrib"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# 로테이팅 파일 핸들러 (10MB, 5개 백업)
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5


class KoreanFormatter(logging.Formatter):
    """로그 레벨명을 한국어로 바꿔 출력하는 포맷터"""

    level_mapping = {
        'DEBUG': '디버그',
        'INFO': '정보',
        'WARNING': '경고',
        'ERROR': '오류',
        'CRITICAL': '치명적'
    }

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        record.levelname = self.level_mapping.get(levelname, levelname)
        try:
            return super().format(record)
        finally:
            # 같은 레코드를 받는 다른 핸들러를 위해 복원
            record.levelname = levelname


def resolve_level(name: str) -> int:
    """
    로그 레벨 이름을 logging 상수로 변환

    Raises:
        ConfigurationException: 알 수 없는 레벨 이름일 때
    """
    level = name.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationException(
            "LOG_LEVEL", f"알 수 없는 로그 레벨입니다: {name} (허용: {', '.join(LOG_LEVELS)})"
        )
    return getattr(logging, level)


def _file_handler(log_file: str) -> logging.Handler:
    path = Path(log_file)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return logging.handlers.RotatingFileHandler(
            filename=path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding='utf-8'
        )
    except OSError as e:
        raise LocalFilesystemException(str(path), f"로그 파일을 열 수 없습니다: {e}") from e


def setup_logging(settings: Settings) -> logging.Logger:
    """
    로깅 시스템 설정

    핸들러를 모두 만든 뒤에 로거를 바꾸므로, 실패하면 기존 설정이 그대로 남습니다.
    여러 번 호출해도 핸들러가 중복되지 않습니다.

    Args:
        settings: 시스템 설정 객체

    Returns:
        logging.Logger: 설정된 패키지 루트 로거

    Raises:
        ConfigurationException: 로그 레벨이 올바르지 않을 때
        LocalFilesystemException: 로그 파일을 만들 수 없을 때
    """
    level = resolve_level(settings.log_level)

    handlers = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        handlers.append(_file_handler(settings.log_file))

    formatter = KoreanFormatter(fmt=settings.log_format, datefmt='%Y-%m-%d %H:%M:%S')
    for handler in handlers:
        handler.setFormatter(formatter)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    # 프로파게이션 비활성화 (중복 출력 방지)
    logger.propagate = False

    logger.debug(f"로깅 시스템이 초기화되었습니다 (레벨: {logging.getLevelName(level)})")
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    패키지 루트 로거 하위의 로거 반환

    패키지 모듈의 __name__ 은 그대로, 그 외 이름은 루트 아래에 붙입니다.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
