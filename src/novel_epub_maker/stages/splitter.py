"""챕터 분할 엔진

정규식 경계 매칭 또는 제목 줄 휴리스틱으로 원고를 (제목, 본문) 초안 목록으로 나눈다.
챕터 미리보기와 최종 빌드가 같은 진입점(split_chapters)을 쓴다.
"""

import re
from pathlib import Path
from typing import List, Optional, Pattern, Union

import xxhash

from novel_epub_maker.stages.chapter import ChapterDraft
from novel_epub_maker.stages.errors import ConversionIOError, InvalidInputError
from novel_epub_maker.stages.models import ConversionMethod
from novel_epub_maker.stages.patterns import (
    STRUCTURAL_MARKERS, PatternKind, compile_custom_pattern, get_builtin_pattern
)
from novel_epub_maker.utils.logger import get_logger
from novel_epub_maker.utils.text_cleaner import normalize_text

logger = get_logger(__name__)

MAX_TITLE_LINE_LENGTH = 60
TITLE_MARKERS = "章回节集卷部篇"
VOLUME_NUMERALS = "一二三四五六七八九十零〇○百千万两"


def is_chapter_title_line(line: str) -> bool:
    """제목 줄 휴리스틱 판정 (trim 된 줄 기준)

    - 비어 있지 않고 60자 이하
    - 구조 표지(序章, 楔子, 番外 ...)로 시작, 또는
    - 第로 시작하고 章回节集卷部篇 중 하나를 포함, 또는
    - 卷로 시작하고 뒤에 숫자(반각/전각/한자 숫자)가 있음
    """
    if not line or len(line) > MAX_TITLE_LINE_LENGTH:
        return False

    if any(line.startswith(marker) for marker in STRUCTURAL_MARKERS):
        return True

    if line.startswith("第") and any(m in line for m in TITLE_MARKERS):
        return True

    if line.startswith("卷"):
        return any(
            ("0" <= ch <= "9") or ("０" <= ch <= "９") or ch in VOLUME_NUMERALS
            for ch in line[1:]
        )

    return False


def split_raw_by_pattern(text: str, pattern: Pattern) -> List[str]:
    """정규식 경계로 원문 조각 목록 생성

    첫 매칭 앞의 서문, 매칭 사이의 챕터, 마지막 매칭 뒤의 잔여 내용을 모두 보존한다.
    """
    t = normalize_text(text)
    matches = list(pattern.finditer(t))
    result: List[str] = []

    if not matches:
        return result

    preface = t[:matches[0].start()].strip()
    if preface:
        result.append(preface)

    # 각 챕터는 다음 매칭 시작(마지막은 텍스트 끝)까지
    for i, match in enumerate(matches):
        next_start = matches[i + 1].start() if i + 1 < len(matches) else len(t)
        chunk = t[match.start():next_start].strip()
        if chunk:
            result.append(chunk)

    return result


def split_raw_by_rules(text: str) -> List[str]:
    """제목 줄 휴리스틱으로 원문 조각 목록 생성"""
    t = normalize_text(text)
    result: List[str] = []
    current = ""

    for line in t.split("\n"):
        trimmed = line.strip()
        if is_chapter_title_line(trimmed):
            if current.strip():
                result.append(current.strip())
            current = f"{trimmed}\n"
        else:
            current += f"{trimmed}\n"

    if current.strip():
        result.append(current.strip())

    return result


class ChapterSplitStrategy:
    """분할 전략 공통 인터페이스"""

    def split(self, text: str) -> List[ChapterDraft]:
        raise NotImplementedError


class RegexSplitStrategy(ChapterSplitStrategy):
    """정규식 경계 분할

    Args:
        pattern: 컴파일된 챕터 제목 패턴 (multi-line)
    """

    def __init__(self, pattern: Pattern):
        self.pattern = pattern

    def split(self, text: str) -> List[ChapterDraft]:
        drafts = [ChapterDraft.from_raw(raw) for raw in split_raw_by_pattern(text, self.pattern)]
        logger.debug(f"Regex split: {len(drafts)} chapters (pattern={self.pattern.pattern!r})")
        return drafts


class SimpleRulesStrategy(ChapterSplitStrategy):
    """제목 줄 휴리스틱 분할 (정규식 설정이 없는 일반 원고용)"""

    def split(self, text: str) -> List[ChapterDraft]:
        drafts = [ChapterDraft.from_raw(raw) for raw in split_raw_by_rules(text)]
        logger.debug(f"Simple rules split: {len(drafts)} chapters")
        return drafts


def _read_config_pattern(config_path: Union[str, Path]) -> str:
    try:
        return Path(config_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConversionIOError(f"Cannot read regex config file: {config_path} ({e})") from e


def create_strategy(
    method: ConversionMethod,
    custom_regex: str = "",
    config_path: Optional[Union[str, Path]] = None
) -> ChapterSplitStrategy:
    """분할 방식에 맞는 전략 생성

    Args:
        method: 분할 방식
        custom_regex: REGEX 방식의 사용자 정규식 (공백이면 내장 중국어 패턴)
        config_path: CUSTOM_CONFIG 방식의 정규식 설정 파일

    Returns:
        ChapterSplitStrategy

    Raises:
        PatternError: 정규식 문법 오류
        InvalidInputError: CUSTOM_CONFIG 인데 설정 파일이 없음
        ConversionIOError: 설정 파일 읽기 실패
    """
    if method == ConversionMethod.REGEX:
        if not custom_regex.strip():
            return RegexSplitStrategy(get_builtin_pattern(PatternKind.CHINESE_CHAPTER))
        return RegexSplitStrategy(compile_custom_pattern(custom_regex))

    if method == ConversionMethod.CUSTOM_CONFIG:
        if not config_path:
            raise InvalidInputError("Please choose a valid regex config file.")
        source = _read_config_pattern(config_path)
        return RegexSplitStrategy(compile_custom_pattern(source))

    return SimpleRulesStrategy()


def split_chapters(
    text: str,
    method: ConversionMethod = ConversionMethod.REGEX,
    custom_regex: str = "",
    config_path: Optional[Union[str, Path]] = None
) -> List[ChapterDraft]:
    """원고를 챕터 초안으로 분할 (미리보기와 빌드 공용)"""
    strategy = create_strategy(method, custom_regex, config_path)
    chapters = strategy.split(text)
    logger.info(f"Chapters detected: {len(chapters)} ({method.value})")
    return chapters


def chapter_signature(
    text: str,
    method: ConversionMethod,
    regex: str = "",
    config_path: Optional[Union[str, Path]] = None
) -> str:
    """분할 입력의 해시 (미리보기/편집 목록이 낡았는지 판별)

    설정 파일은 읽을 수 있으면 내용 바이트, 아니면 경로 문자열을 해시에 넣는다.

    Returns:
        xxh64 hex digest
    """
    hasher = xxhash.xxh64()
    for part in (text, method.value, regex):
        hasher.update(part.encode("utf-8"))
        hasher.update(b"\x00")

    if config_path:
        try:
            hasher.update(Path(config_path).read_bytes())
        except OSError:
            hasher.update(str(config_path).encode("utf-8"))

    return hasher.hexdigest()
