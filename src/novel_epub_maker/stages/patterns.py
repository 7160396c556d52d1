"""챕터 패턴 라이브러리

내장 챕터 제목 정규식 (중국어 / 영어 / 전체 매칭)과 사용자 정규식 컴파일
"""

import re
from enum import Enum
from typing import Dict, Pattern
from novel_epub_maker.stages.errors import PatternError
from novel_epub_maker.utils.logger import get_logger

logger = get_logger(__name__)

CHINESE_NUMERALS = "0-9０-９一二三四五六七八九十零〇○百千万两"
STRUCTURAL_MARKERS = ["序章", "序言", "序", "楔子", "引子", "前言", "后记", "尾声", "终章", "番外", "外传", "附录"]

CHINESE_CHAPTER_PATTERN = (
    rf"^\s*(?:第[{CHINESE_NUMERALS}]+[章节回部节集卷][^\n]*"
    rf"|卷[{CHINESE_NUMERALS}]+[^\n]*"
    rf"|(?:{'|'.join(STRUCTURAL_MARKERS)})[^\n]*)"
)
ENGLISH_CHAPTER_PATTERN = r"^\s*Chapter\s*[0-9]+[^\n]*"
MATCH_ALL_PATTERN = r".*"


class PatternKind(Enum):
    """내장 패턴 종류"""
    CHINESE_CHAPTER = "chinese_chapter"
    ENGLISH_CHAPTER = "english_chapter"
    SIMPLE_RULES = "simple_rules"


# 내장 패턴은 임포트 시 한 번만 컴파일 (읽기 전용)
BUILTIN_PATTERNS: Dict[PatternKind, Pattern] = {
    PatternKind.CHINESE_CHAPTER: re.compile(CHINESE_CHAPTER_PATTERN, re.MULTILINE),
    PatternKind.ENGLISH_CHAPTER: re.compile(ENGLISH_CHAPTER_PATTERN, re.MULTILINE),
    PatternKind.SIMPLE_RULES: re.compile(MATCH_ALL_PATTERN),
}


def get_builtin_pattern(kind: PatternKind) -> Pattern:
    """내장 패턴 반환"""
    return BUILTIN_PATTERNS[kind]


def compile_custom_pattern(source: str) -> Pattern:
    """사용자 정규식 컴파일 (trim 후 multi-line 모드)

    Args:
        source: 정규식 문자열

    Returns:
        컴파일된 패턴

    Raises:
        PatternError: 정규식 문법 오류
    """
    source = source.strip()
    try:
        pattern = re.compile(source, re.MULTILINE)
    except re.error as e:
        logger.debug(f"Regex compile failed: {source!r} ({e})")
        raise PatternError(f"Invalid Regex Pattern: {e}") from e
    logger.debug(f"Custom pattern compiled: {source!r}")
    return pattern
