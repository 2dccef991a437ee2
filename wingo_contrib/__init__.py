"""
wingo-contrib

Wingo 윈도우 매니저용 contrib 스크립트를 설치하고 관리하는 명령행 도구입니다.
"""

__version__ = "0.1.0"
