"""텍스트 / 파일명 유틸리티 테스트

normalize_text, generate_filename, normalize_output_dir, sanitize_resource_name,
parse_filename_to_book_info 검증
"""

import os
from pathlib import Path

from novel_epub_maker.stages.models import BookInfo
from novel_epub_maker.utils.text_cleaner import (
    display_or_placeholder, generate_filename, normalize_output_dir, normalize_text,
    parse_filename_to_book_info, sanitize_filename_component, sanitize_resource_name
)


def test_normalize_text():
    """캐리지 리턴 / 전각 공백 제거"""
    assert normalize_text("　　第一章\r\n内容\r\n") == "第一章\n内容"
    assert normalize_text("  plain  ") == "plain"
    assert normalize_text("\r\n　") == ""

    print("✅ normalize_text tests passed!")


def test_generate_filename():
    """파일명 템플릿 치환 + 금지 문자 제거"""
    info = BookInfo(title="My/Book", author="A:B")
    assert generate_filename(info, "my*file") == "myfile.epub"

    info = BookInfo(title="斗破苍穹", author="天蚕土豆", publish_date=" 2024-05-01 ")
    assert generate_filename(info, "{书名}_{作者}.epub") == "斗破苍穹_天蚕土豆.epub"
    assert generate_filename(info, "{书名}-{日期}") == "斗破苍穹-2024-05-01.epub"

    # 빈 제목/저자는 기본값
    assert generate_filename(BookInfo(), "{书名}_{作者}.epub") == "Untitled_Unknown.epub"

    # 금지 문자만 남으면 제목_저자
    assert generate_filename(BookInfo(title="T", author="A"), '<>|"') == "T_A.epub"
    assert generate_filename(BookInfo(), "") == "Untitled_Unknown.epub"

    print("✅ generate_filename tests passed!")


def test_sanitize_helpers():
    """금지 문자 / 리소스 이름 정리"""
    assert sanitize_filename_component(' a/b\\c:d*e?f"g<h>i|j ') == "abcdefghij"
    assert sanitize_resource_name("bad:/name *.png") == "badname_.png"
    assert sanitize_resource_name("my cover.jpg") == "my_cover.jpg"
    assert display_or_placeholder("   ", "Unknown") == "Unknown"
    assert display_or_placeholder(" Alice ", "Unknown") == "Alice"

    print("✅ sanitize helper tests passed!")


def test_normalize_output_dir():
    """빈 값 / "." → 현재 디렉토리"""
    cwd = Path(os.getcwd())
    assert normalize_output_dir("") == cwd
    assert normalize_output_dir(".") == cwd
    assert normalize_output_dir("out/books") == Path("out/books")

    print("✅ normalize_output_dir tests passed!")


def test_parse_filename_to_book_info():
    """파일명 → (제목, 저자)"""
    assert parse_filename_to_book_info("My Book - Alice.txt") == ("My Book", "Alice")
    assert parse_filename_to_book_info("斗破苍穹_天蚕土豆.txt") == ("斗破苍穹", "天蚕土豆")
    assert parse_filename_to_book_info("雪中悍刀行.txt") == ("雪中悍刀行", "")
    assert parse_filename_to_book_info("书名—作者.txt") == ("书名", "作者")

    print("✅ parse_filename_to_book_info tests passed!")


def main():
    """테스트 실행"""
    print("=" * 50)
    print("Text Cleaner Utility Tests")
    print("=" * 50)

    test_normalize_text()
    test_generate_filename()
    test_sanitize_helpers()
    test_normalize_output_dir()
    test_parse_filename_to_book_info()

    print("=" * 50)
    print("✅ All tests passed!")
    print("=" * 50)


if __name__ == "__main__":
    main()
