"""텍스트 / 파일명 정리 유틸리티

원고 정규화, 출력 파일명 생성, 아카이브 리소스 이름 정리
"""

import os
import re
from pathlib import Path
from typing import Tuple
from novel_epub_maker.utils.logger import get_logger

logger = get_logger(__name__)

INVALID_FILENAME_CHARS = '/\\:*?"<>|'
FILENAME_SEPARATORS = ["_", "-", " ", "—", "–", "·"]

_NORMALIZE_RE = re.compile(r"[\r\u3000]+")


def normalize_text(text: str) -> str:
    """원고 정규화: 캐리지 리턴과 전각 공백(U+3000) 제거 후 trim

    Examples:
        >>> normalize_text("\\u3000\\u3000第一章\\r\\n内容\\r\\n")
        "第一章\\n内容"
    """
    return _NORMALIZE_RE.sub("", text).strip()


def sanitize_filename_component(value: str) -> str:
    """파일명에 쓸 수 없는 문자(/ \\ : * ? " < > |) 제거 후 trim"""
    for ch in INVALID_FILENAME_CHARS:
        value = value.replace(ch, "")
    return value.strip()


def display_or_placeholder(value: str, fallback: str) -> str:
    """공백 문자열이면 fallback, 아니면 trim 결과"""
    return value.strip() or fallback


def generate_filename(book_info, template: str) -> str:
    """출력 EPUB 파일명 생성

    템플릿의 {书名}(제목), {作者}(저자), {日期}(출판일)을 치환하고
    금지 문자를 제거한 뒤 .epub 확장자를 보장한다.

    Args:
        book_info: BookInfo
        template: 파일명 템플릿 (예: "{书名}_{作者}.epub")

    Returns:
        파일명

    Examples:
        >>> generate_filename(BookInfo(title="My/Book", author="A:B"), "my*file")
        "myfile.epub"
    """
    title = display_or_placeholder(book_info.title, "Untitled")
    author = display_or_placeholder(book_info.author, "Unknown")

    filename = template.replace("{书名}", title)
    filename = filename.replace("{作者}", author)
    filename = filename.replace("{日期}", book_info.publish_date.strip())
    filename = sanitize_filename_component(filename)

    if not filename.endswith(".epub"):
        filename += ".epub"

    if filename == ".epub":
        filename = f"{title}_{author}.epub"

    logger.debug(f"Filename generated: '{template}' → '{filename}'")
    return filename


def normalize_output_dir(path: str) -> Path:
    """출력 디렉토리 정규화 (빈 문자열 또는 "." → 현재 작업 디렉토리)"""
    if not path or not path.strip() or path.strip() == ".":
        return Path(os.getcwd())
    return Path(path)


def sanitize_resource_name(name: str) -> str:
    """아카이브 리소스 이름 정리: 금지 문자 제거, 공백 → 언더스코어

    Examples:
        >>> sanitize_resource_name("bad:/name *.png")
        "badname_.png"
    """
    for ch in INVALID_FILENAME_CHARS:
        name = name.replace(ch, "")
    return name.replace(" ", "_")


def parse_filename_to_book_info(filename: str) -> Tuple[str, str]:
    """원고 파일명에서 (제목, 저자) 추정

    확장자를 뗀 이름을 첫 번째로 발견되는 구분자(_ - 공백 — – ·)로 한 번만 나눈다.
    구분자가 없으면 전체가 제목이다.

    Examples:
        >>> parse_filename_to_book_info("My Book - Alice.txt")
        ("My Book", "Alice")
        >>> parse_filename_to_book_info("斗破苍穹_天蚕土豆.txt")
        ("斗破苍穹", "天蚕土豆")
    """
    stem = Path(filename).stem or filename
    title, author = "", ""

    for sep in FILENAME_SEPARATORS:
        if sep in stem:
            first, second = stem.split(sep, 1)
            title, author = first.strip(), second.strip()
            break

    if not title:
        title = stem

    return title, author
