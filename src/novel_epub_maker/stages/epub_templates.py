"""EPUB XHTML 템플릿

챕터 / 삽화 / 텍스트 표지 페이지 렌더링과 제목·문단 처리 헬퍼
"""

from pathlib import Path
from typing import List, Optional, Tuple
from ebooklib import epub
from novel_epub_maker.stages.chapter import ChapterDraft
from novel_epub_maker.stages.models import BookInfo, CssTemplate, ImageAsset, TextStyle

FANTASY_DEFAULT_HEADER = "images/头图.webp"
CHINESE_TITLE_MARKERS = "章回节卷部篇"
CHINESE_TITLE_SEPARATORS = ":：-—–―·・ \t　"
ENGLISH_TITLE_SEPARATORS = ":：-—"
CLOSING_PUNCT = "”’）】》」』〉)]}\"'"
SENTENCE_PUNCT = "。！？…!?.；;：:"
# 챕터 번호는 u32 범위까지만 로마 숫자로 바꿈
MAX_CHAPTER_NUMBER = 4294967295

ROMAN_NUMERALS = [
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
]

_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;"}


def escape_html(text: str) -> str:
    """& < > " ' 이스케이프"""
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def merge_classes(base: str, extra: str) -> str:
    """기본 클래스 뒤에 추가 클래스 토큰을 붙임"""
    if not extra.strip():
        return base
    return " ".join([base] + extra.split())


def _document_head(language: str) -> str:
    return f"""<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.1//EN" "http://www.w3.org/TR/xhtml11/DTD/xhtml11.dtd">
<html xmlns="http://www.w3.org/1999/xhtml" xml:lang="{language}">
<head>
<meta http-equiv="Content-Type" content="application/xhtml+xml; charset=utf-8"/>
<link rel="stylesheet" type="text/css" href="stylesheet.css"/>
</head>
"""


def to_roman(num: int) -> str:
    """정수 → 로마 숫자 (1994 → MCMXCIV)"""
    out = []
    for value, symbol in ROMAN_NUMERALS:
        while num >= value:
            out.append(symbol)
            num -= value
    return "".join(out)


def split_title_line(line: str) -> Tuple[str, Optional[str]]:
    """첫 공백에서 (라벨, 나머지) 분리

    Examples:
        >>> split_title_line("第一章 风起")
        ("第一章", "风起")
        >>> split_title_line("序章")
        ("序章", None)
    """
    parts = line.split(None, 1)
    if len(parts) < 2:
        return line.strip(), None
    label, rest = parts[0], parts[1].strip()
    return label, rest or None


def split_chinese_chapter_title(line: str) -> Optional[Tuple[str, str]]:
    """第…章 형식 제목을 (번호, 제목)으로 분리

    Examples:
        >>> split_chinese_chapter_title("第十二章：归来")
        ("第十二章", "归来")
        >>> split_chinese_chapter_title("第十二章")
        None
    """
    trimmed = line.strip()
    if not trimmed.startswith("第"):
        return None

    for marker in CHINESE_TITLE_MARKERS:
        idx = trimmed.find(marker)
        if idx < 0:
            continue
        end = idx + 1
        prefix = trimmed[:end].strip()
        rest = trimmed[end:].strip().lstrip(CHINESE_TITLE_SEPARATORS).strip()
        if rest:
            return prefix, rest

    return None


def format_chapter_heading(line: str, language: str) -> Tuple[str, Optional[str]]:
    """챕터 머리 (라벨, 제목) 생성

    영어 책이거나 "Chapter " 로 시작하면 번호를 로마 숫자 라벨로 바꾼다.
    그 외에는 첫 공백 기준으로 나눈다.

    Examples:
        >>> format_chapter_heading("Chapter 12: The Storm", "en")
        ("Chapter XII", "The Storm")
        >>> format_chapter_heading("第一章 风起", "zh-CN")
        ("第一章", "风起")
    """
    trimmed = line.strip()
    is_english = language.strip().lower().startswith("en")

    if is_english or trimmed.lower().startswith("chapter "):
        tokens = trimmed.split()
        if len(tokens) >= 2 and tokens[0].lower() == "chapter":
            digits = ""
            for ch in tokens[1]:
                if not ("0" <= ch <= "9"):
                    break
                digits += ch
            if digits and int(digits) <= MAX_CHAPTER_NUMBER:
                rest = " ".join(tokens[2:])
                if rest[:1] and rest[0] in ENGLISH_TITLE_SEPARATORS:
                    rest = rest.lstrip(ENGLISH_TITLE_SEPARATORS).strip()
                label = f"Chapter {to_roman(int(digits))}"
                return label, (rest if rest.strip() else None)

    return split_title_line(trimmed)


def split_lines(content: str) -> List[str]:
    """LF 기준 줄 분리 (줄 끝 CR 제거, 마지막 빈 줄은 버림)

    splitlines() 와 달리 폼 피드, 파일 구분자, U+2028 등은 줄 경계로 보지 않는다.
    """
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def ends_with_sentence_punct(text: str) -> bool:
    """닫는 따옴표/괄호를 건너뛴 마지막 문자가 문장 부호인지"""
    for ch in reversed(text):
        if ch in CLOSING_PUNCT:
            continue
        return ch in SENTENCE_PUNCT
    return False


def split_paragraphs(content: str) -> List[List[str]]:
    """본문을 문단(줄 목록) 목록으로 분리

    빈 줄이 문단 경계다. 빈 줄이 하나도 없으면 2/3 이상의 줄이 문장 부호로 끝날 때
    줄마다 한 문단, 아니면 전체가 한 문단.

    Examples:
        >>> split_paragraphs("a\\nb\\n\\nc\\n\\n\\n")
        [["a", "b"], ["c"]]
    """
    lines = split_lines(content)
    has_blank = any(not line.strip() for line in lines)

    if not has_blank:
        cleaned = [line.strip() for line in lines if line.strip()]
        punct_lines = sum(1 for line in cleaned if ends_with_sentence_punct(line))

        if cleaned and punct_lines * 3 >= len(cleaned) * 2:
            return [[line] for line in cleaned]
        if cleaned:
            return [cleaned]

    paragraphs: List[List[str]] = []
    current: List[str] = []

    for line in lines:
        line = line.rstrip()
        if not line.strip():
            if current:
                paragraphs.append(current)
                current = []
        else:
            current.append(line)

    if current:
        paragraphs.append(current)

    if not paragraphs and content.strip():
        paragraphs.append([content.strip()])

    return paragraphs


def extract_marker_class(lines: List[str]) -> Optional[str]:
    """문단 첫 줄의 [class=...] 표식을 떼어 클래스 반환 (lines 를 직접 수정)

    Examples:
        >>> lines = ["[class=note important] Hello"]
        >>> extract_marker_class(lines), lines
        ("note important", ["Hello"])
    """
    if not lines:
        return None

    first = lines[0].lstrip()
    if not first.lower().startswith("[class="):
        return None

    end = first.find("]")
    if end < 0:
        return None

    class_value = first[7:end].strip()
    if not class_value:
        return None

    rest = first[end + 1:].lstrip()
    if rest:
        lines[0] = rest
    else:
        lines.pop(0)
    return class_value


def _standard_chapter_header(title: str, language: str, style: TextStyle) -> str:
    label, heading = format_chapter_heading(title, language)
    title_class = style.extra_title_class.strip()
    h2_open = f'<h2 class="{escape_html(title_class)}">' if title_class else "<h2>"

    html = f'<div class="{merge_classes("chapter-header", style.extra_chapter_class)}">\n'
    html += '<div class="chapter-ornament"></div>\n'
    if heading is not None:
        html += f'<div class="chapter-label">{escape_html(label)}</div>\n'
        html += f"{h2_open}{escape_html(heading)}</h2>\n"
    else:
        html += f"{h2_open}{escape_html(label)}</h2>\n"
    html += '<div class="chapter-ornament"></div>\n'
    html += "</div>\n"
    return html


def _fantasy_chapter_header(
    title: str,
    chapter_no: str,
    chapter_title: str,
    chapter_index: int,
    style: TextStyle,
    header_image: Optional[ImageAsset]
) -> str:
    header_src = f"images/{header_image.name}" if header_image else FANTASY_DEFAULT_HEADER
    hidden_class = merge_classes("chapter-title-hidden", style.extra_title_class)
    star = '<img class="emoji" src="images/4star.webp" alt=""/>'
    return (
        f'<div class="Header-image-dk"><img class="width100" src="{escape_html(header_src)}" alt=""/></div>\n'
        f'<h2 class="{escape_html(hidden_class)}">{escape_html(title)}</h2>\n'
        f'<p class="nt">{star} {escape_html(chapter_no)} {star}</p>\n'
        f'<p class="et">CHAPTER{chapter_index:02d}</p>\n'
        f'<p class="ct"><img class="emoji1" src="images/ttl.webp" alt=""/> {escape_html(chapter_title)} '
        f'<img class="emoji1" src="images/ttr.webp" alt=""/></p>\n'
    )


def render_chapter(
    chapter: ChapterDraft,
    language: str,
    style: TextStyle,
    template: CssTemplate,
    chapter_index: int,
    header_image: Optional[ImageAsset] = None,
    header_fullbleed: bool = False
) -> str:
    """챕터 XHTML 문서 생성

    Args:
        chapter: 챕터 초안
        language: xml:lang 값
        style: 타이포그래피 / 추가 클래스
        template: 시각 템플릿
        chapter_index: 1부터 시작하는 챕터 번호 (Fantasy 의 CHAPTERnn)
        header_image: 챕터 머리 이미지
        header_fullbleed: 머리 이미지 전폭 표시

    Returns:
        XHTML 문자열
    """
    title = chapter.title.strip()
    is_fantasy = template == CssTemplate.FANTASY
    body_class = merge_classes("chapter intro2 fantasy" if is_fantasy else "chapter", style.extra_body_class)

    html = _document_head(language)
    html += f'<body class="{escape_html(body_class)}">\n'

    fantasy_title = split_chinese_chapter_title(title) if is_fantasy else None
    if fantasy_title:
        chapter_no, chapter_title = fantasy_title
        html += _fantasy_chapter_header(title, chapter_no, chapter_title, chapter_index, style, header_image)
    else:
        if header_image is not None and not is_fantasy:
            header_class = "chapter-head-image fullbleed" if header_fullbleed else "chapter-head-image"
            html += f'<div class="{header_class}"><img src="images/{escape_html(header_image.name)}" alt=""/></div>\n'
        html += _standard_chapter_header(title, language, style)

    indent = f"{style.text_indent:.2f}"
    for idx, paragraph in enumerate(split_paragraphs(chapter.content)):
        marker_class = extract_marker_class(paragraph)
        joined = "<br/>".join(escape_html(line) for line in paragraph)

        paragraph_class = "chapter-paragraph chapter-paragraph-first" if idx == 0 else "chapter-paragraph"
        paragraph_class = merge_classes(paragraph_class, style.extra_paragraph_class)
        if marker_class:
            paragraph_class = merge_classes(paragraph_class, marker_class)

        para_indent = "0.00" if idx == 0 else indent
        html += f'<p class="{escape_html(paragraph_class)}" style="text-indent: {para_indent}em;">{joined}</p>\n'

    html += "</body>\n</html>"
    return html


def gallery_title(language: str) -> str:
    """삽화 페이지 기본 제목 (중국어/미지정 → 插图, 그 외 → Illustrations)"""
    lang = language.strip().lower()
    if not lang or lang.startswith("zh"):
        return "插图"
    return "Illustrations"


def render_gallery(images: List[ImageAsset], language: str, title: str) -> str:
    """삽화 페이지 XHTML 생성 (캡션이 비어 있으면 figcaption 생략)"""
    html = _document_head(language)
    html += "<body>\n"
    html += f"<h2>{escape_html(title)}</h2>\n"

    for image in images:
        caption = escape_html(image.caption) if image.caption else ""
        html += "<figure>\n"
        html += f'<img src="images/{escape_html(image.name)}" alt="{caption}"/>\n'
        if caption:
            html += f"<figcaption>{caption}</figcaption>\n"
        html += "</figure>\n"

    html += "</body>\n</html>"
    return html


def render_text_cover(book_info: BookInfo, language: str, template: CssTemplate) -> str:
    """이미지 표지가 없을 때 쓰는 텍스트 표지 XHTML"""
    title = book_info.title.strip() or "Untitled"
    author = book_info.author.strip() or "Unknown"
    subtitle = book_info.category.strip()
    meta = " · ".join(
        part for part in (book_info.publisher.strip(), book_info.publish_date.strip()) if part
    )

    if template == CssTemplate.FOLIO:
        body_class = "cover-page cover-folio"
    elif template == CssTemplate.FANTASY:
        body_class = "cover-page cover-fantasy"
    else:
        body_class = "cover-page"

    html = _document_head(language)
    html += f'<body class="{body_class}">\n'
    html += '<div class="cover-frame">\n'
    html += '<div class="cover-ornament"></div>\n'
    html += f'<div class="cover-title">{escape_html(title)}</div>\n'
    if subtitle:
        html += f'<div class="cover-subtitle">{escape_html(subtitle)}</div>\n'
    html += f'<div class="cover-author">{escape_html(author)}</div>\n'
    html += '<div class="cover-ornament"></div>\n'
    if meta:
        html += f'<div class="cover-meta">{escape_html(meta)}</div>\n'
    html += "</div>\n"
    html += "</body>\n</html>"
    return html


def create_xhtml_item(file_name: str, content: str) -> epub.EpubItem:
    """렌더링된 XHTML 을 EPUB 문서 항목으로 포장"""
    return epub.EpubItem(
        uid=Path(file_name).stem,
        file_name=file_name,
        media_type="application/xhtml+xml",
        content=content.encode("utf-8")
    )
