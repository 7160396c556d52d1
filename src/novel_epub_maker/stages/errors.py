"""변환 / 빌드 예외 계층

변환 단계(입력 검증, 패턴, 파일 읽기)와 빌드 단계(EPUB 조립, 기록)의 실패를 구분
"""

from typing import Optional


class ConversionError(Exception):
    """변환 파이프라인 최상위 예외"""


class InvalidInputError(ConversionError):
    """빈 텍스트, 챕터 없음, 설정 파일 미지정"""


class PatternError(ConversionError):
    """정규식 컴파일 실패"""


class ConversionIOError(ConversionError):
    """정규식 설정 파일 읽기 실패"""


class BuildFailedError(ConversionError):
    """빌드 단계 실패 래퍼

    Attributes:
        cause: 원인이 된 BuildError
    """

    def __init__(self, cause: "BuildError"):
        super().__init__(f"EPUB build failed: {cause}")
        self.cause: Optional[BuildError] = cause


class BuildError(Exception):
    """EPUB 빌드 최상위 예외"""


class BuildInputError(BuildError):
    """빌드 입력 오류 (챕터 없음 등)"""


class BuildIOError(BuildError):
    """출력 디렉토리 생성 / 자산 읽기 실패"""


class ArchiveError(BuildError):
    """EPUB 아카이브 기록 실패"""
