"""
예외 클래스 정의 모듈

wingo-contrib 관리 도구에서 사용되는 커스텀 예외들을 정의합니다.
"""

from typing import Optional


class ContribException(Exception):
    """wingo-contrib 기본 예외 클래스"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        """
        예외 초기화

        Args:
            message: 오류 메시지
            error_code: 오류 코드 (선택사항)
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class UsageException(ContribException):
    """명령행 인자가 잘못되었을 때 발생하는 예외"""

    def __init__(self, message: str):
        super().__init__(message, "USAGE_ERROR")


class ScriptNotFoundException(ContribException):
    """원격 저장소에서 스크립트를 찾을 수 없을 때 발생하는 예외"""

    def __init__(self, script_name: str, repository: str = "wingo-contrib"):
        """
        스크립트 찾기 실패 예외 초기화

        Args:
            script_name: 스크립트 이름
            repository: 저장소 이름
        """
        message = f"스크립트 '{script_name}'이(가) {repository}에 존재하지 않습니다"
        super().__init__(message, "SCRIPT_NOT_FOUND")
        self.script_name = script_name
        self.repository = repository


class ScriptAlreadyInstalledException(ContribException):
    """이미 설치된 스크립트를 다시 설치하려 할 때 발생하는 예외"""

    def __init__(self, script_name: str):
        message = (
            f"스크립트 '{script_name}'은(는) 이미 설치되어 있습니다. "
            "업데이트하려면 upgrade 명령을 사용하세요"
        )
        super().__init__(message, "SCRIPT_ALREADY_INSTALLED")
        self.script_name = script_name


class ScriptNotInstalledException(ContribException):
    """설치되지 않은 스크립트를 업그레이드하려 할 때 발생하는 예외"""

    def __init__(self, script_name: str):
        message = (
            f"스크립트 '{script_name}'은(는) 설치되어 있지 않습니다. "
            "먼저 install 명령으로 추가하세요"
        )
        super().__init__(message, "SCRIPT_NOT_INSTALLED")
        self.script_name = script_name


class ScriptRepositoryException(ContribException):
    """원격 저장소 통신 관련 예외"""

    def __init__(self, repository: str, error_detail: str):
        """
        스크립트 저장소 예외 초기화

        Args:
            repository: 저장소 이름 또는 URL
            error_detail: 오류 상세 정보
        """
        message = f"스크립트 저장소 오류 ({repository}): {error_detail}"
        super().__init__(message, "SCRIPT_REPOSITORY_ERROR")
        self.repository = repository
        self.error_detail = error_detail


class CorruptRepositoryException(ContribException):
    """저장소의 스크립트 디렉토리에 필수 파일이 없을 때 발생하는 예외"""

    def __init__(self, script_name: str, missing_file: str, repository: str = "wingo-contrib"):
        """
        손상된 저장소 예외 초기화

        Args:
            script_name: 스크립트 이름
            missing_file: 누락된 필수 파일 이름
            repository: 저장소 이름
        """
        message = (
            f"손상된 저장소 ({repository}): "
            f"{script_name} 스크립트에 {missing_file} 파일이 없습니다"
        )
        super().__init__(message, "CORRUPT_REPOSITORY")
        self.script_name = script_name
        self.missing_file = missing_file
        self.repository = repository


class LocalFilesystemException(ContribException):
    """로컬 파일 시스템 작업 실패 시 발생하는 예외"""

    def __init__(self, path: str, error_detail: str):
        """
        파일 시스템 예외 초기화

        Args:
            path: 작업 대상 경로
            error_detail: 오류 상세 정보
        """
        message = f"파일 시스템 오류 ({path}): {error_detail}"
        super().__init__(message, "LOCAL_FILESYSTEM_ERROR")
        self.path = path
        self.error_detail = error_detail


class ConfigurationException(ContribException):
    """설정 오류 시 발생하는 예외"""

    def __init__(self, config_key: str, error_detail: str):
        """
        설정 예외 초기화

        Args:
            config_key: 설정 키
            error_detail: 오류 상세 정보
        """
        message = f"설정 오류: {config_key} - {error_detail}"
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key
        self.error_detail = error_detail
