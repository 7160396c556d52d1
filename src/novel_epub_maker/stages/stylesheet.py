"""스타일시트 생성

기본 CSS + 템플릿 블록 + 타이포그래피 + 표지/챕터 머리 + 템플릿별 오버라이드
+ 사용자 폰트 + 사용자 CSS 순서로 stylesheet.css 내용을 만든다.
"""

from pathlib import Path
from typing import Optional, Tuple
from novel_epub_maker.stages.css_templates import get_template_css
from novel_epub_maker.stages.models import CssTemplate, FontAsset, TextStyle, DEFAULT_BASE_CSS_PATH
from novel_epub_maker.utils.logger import get_logger

logger = get_logger(__name__)

COVER_CSS = """\
.cover-page { text-align: center; page-break-after: always; }
.cover-frame { position: relative; margin: 2.8em 1.6em; padding: 2.4em 1.8em; border: 2px double #6b5b4b; background: #fbf8f2; }
.cover-title { font-size: 2.2em; letter-spacing: 0.12em; line-height: 1.2; margin: 0.6em 0 0.2em; }
.cover-subtitle { font-size: 1.05em; letter-spacing: 0.08em; color: #6b5b4b; margin: 0.2em 0 0.6em; }
.cover-author { font-size: 1.1em; letter-spacing: 0.2em; margin: 1.2em 0 0.2em; }
.cover-meta { font-size: 0.85em; letter-spacing: 0.2em; color: #6b5b4b; margin-top: 1.4em; }
.cover-ornament { height: 1.8em; width: 70%; margin: 0.8em auto; border-top: 1px solid #6b5b4b; border-bottom: 1px solid #cbbda9; }
"""

_CORNER = "linear-gradient(#8a7a66, #8a7a66)"
_CORNER_MARKS = ", ".join(
    f"{_CORNER} {pos}/{size} no-repeat"
    for pos in ("left top", "right top", "left bottom", "right bottom")
    for size in ("1.4em 1px", "1px 1.4em")
)

CHAPTER_HEADER_CSS = f"""\
.chapter {{ page-break-before: always; break-before: page; }}
.chapter-head-image {{ text-align: center; margin: 0 0 1.2em; }}
.chapter-head-image img {{ width: 100%; max-width: 100%; border: none; box-shadow: none; background: none; }}
.chapter-head-image.fullbleed {{ duokan-bleed: lefttopright; margin: 0 0 -30% 0; }}
.chapter-header {{ text-align: center; margin: 2.4em 0 2.1em; position: relative; padding: 0.8em 0 1em; background: {_CORNER_MARKS}; }}
.chapter-header::before, .chapter-header::after {{ content: ""; position: absolute; top: 0.25em; width: 0.45em; height: 0.45em; border: 1px solid #8a7a66; background: transparent; transform: rotate(45deg); }}
.chapter-header::before {{ left: 0.35em; }}
.chapter-header::after {{ right: 0.35em; }}
.chapter-header h2 {{ display: inline-block; padding: 0 0.7em; position: relative; }}
.chapter-ornament {{ border-top: 1px solid #6b5b4b; border-bottom: 1px solid #c0b5a4; height: 0; margin: 0.9em auto; width: 54%; text-align: center; }}
.chapter-ornament::after {{ content: ""; display: inline-block; margin-top: -0.75em; width: 0.3em; height: 0.3em; border: 1px solid #6b5b4b; border-radius: 50%; background: transparent; box-shadow: -1.2em 0 0 #6b5b4b, 1.2em 0 0 #6b5b4b, -2.4em 0 0 #c0b5a4, 2.4em 0 0 #c0b5a4, -3.6em 0 0 #6b5b4b, 3.6em 0 0 #6b5b4b; }}
.chapter-label {{ string-set: chapter content(); }}
@page {{ @top-center {{ content: string(chapter); font-family: "Garamond", "Times New Roman", serif; font-size: 0.7em; letter-spacing: 0.2em; color: #6b5b4b; }} }}
@page :first {{ @top-center {{ content: normal; }} }}
.chapter-paragraph-first {{ text-indent: 0 !important; }}
.chapter-paragraph-first::first-letter {{ float: left; font-size: 3.2em; line-height: 0.85; padding: 0.04em 0.1em 0 0; font-weight: 600; color: #5a4a3b; }}
"""

FOLIO_OVERRIDES_CSS = """\
.chapter-header { margin: 2.4em 0 2.1em; padding: 0.9em 0 1.1em; border-top: 1px solid #6b5b4b; border-bottom: 1px solid #cbbda9; background: #fbf8f2; }
.chapter-ornament { border: none; height: 1.7em; width: 62%; margin: 0.75em auto; background: url("ornaments/folio-divider.svg") center / 62% auto no-repeat; }
.chapter-ornament::after { display: none; }
.chapter-label { letter-spacing: 0.35em; color: #5a4a3b; }
"""

FOLIO_COVER_CSS = """\
.cover-frame { border-color: #6b5b4b; background: #fcfaf6; box-shadow: inset 0 0 0 3px rgba(107,91,75,0.08); }
.cover-frame::before { content: ""; position: absolute; inset: 0.9em; border: 1px solid rgba(107,91,75,0.28); }
.cover-ornament { border: none; height: 2.0em; width: 72%; margin: 0.95em auto; background: url("ornaments/folio-divider.svg") center / 70% auto no-repeat; }
.cover-title { letter-spacing: 0.2em; font-size: 2.35em; }
.cover-author { letter-spacing: 0.28em; }
.cover-meta { letter-spacing: 0.22em; }
"""

FANTASY_FONT_FAMILIES = ["kt", "rbs", "dbs", "ys", "hyss"]

FANTASY_BACKGROUNDS_CSS = """\
body.intro { background-image: url("images/背景.webp"); background-size: cover; background-position: center; }
body.intro1 { background-image: url("images/背景1.webp"); background-size: cover; background-position: center; }
body.intro2 { background-image: url("images/纹理.webp"); background-repeat: repeat; background-size: 100% auto; }
body.cover-fantasy { background-image: url("images/背景.webp"); background-size: cover; background-position: center; background-repeat: no-repeat; }
"""

FANTASY_DUOKAN_HEADER_CSS = """\
.Header-image-dk { text-align: right; text-indent: 0em; duokan-text-indent: 0em; margin: 0 0 -30% 0; margin-left: auto; page-break-before: always; duokan-bleed: lefttopright; }
.Header-image-dk img, img.width100 { width: 100%; max-width: 100%; border: none; box-shadow: none; background: none; }
.chapter-title-hidden { display: none; }
p.nt { font-family: "dbs"; color: #a66c44; font-weight: normal; font-size: 1em; margin: 4px 0; duokan-text-indent: 0em; text-indent: 0em; text-align: center; }
p.et { font-family: "rbs"; color: #bca68a; font-weight: normal; font-size: 0.8em; margin: 4px 0; duokan-text-indent: 0em; text-indent: 0em; text-align: center; letter-spacing: 0.6em; }
p.ct { font-family: "rbs"; color: #7a3a24; font-weight: normal; font-size: 1.3em; margin: 4px 0 3em; duokan-text-indent: 0em; text-indent: 0em; text-align: center; }
img.emoji { height: 0.9em; vertical-align: -1px; border: none; box-shadow: none; background: none; }
img.emoji1 { height: 0.6em; vertical-align: 0; border: none; box-shadow: none; background: none; }
div.tip { width: 90%; background-image: url("images/纸纹.webp"); background-size: 100% auto; border-radius: 8px; padding: 8px; margin: 1em auto; }
.tip p { text-indent: 0em; duokan-text-indent: 0em; }
"""

FANTASY_OVERRIDES_CSS = """\
.chapter-header { margin: 2.6em 0 2.2em; padding: 1.0em 0 1.2em; border-top: 1px solid #a66c44; border-bottom: 1px solid #bca68a; background: linear-gradient(#fbf8f2, #f5ede2); }
.chapter-ornament { border: none; height: 1.9em; width: 68%; margin: 0.85em auto; background: url("ornaments/fantasy-divider.svg") center / 70% auto no-repeat; }
.chapter-ornament::after { display: none; }
.chapter-label { letter-spacing: 0.45em; color: #a66c44; }
"""

FANTASY_COVER_CSS = """\
.cover-frame { border-color: #a66c44; background: #f6efe3 url("images/纸纹.webp") center / cover no-repeat; box-shadow: inset 0 0 0 3px rgba(166,108,68,0.14); }
.cover-frame::before { content: ""; position: absolute; inset: 0.8em; border: 1px solid rgba(166,108,68,0.32); border-radius: 2px; }
.cover-ornament { border: none; height: 2.1em; width: 74%; margin: 1.0em auto; background: url("ornaments/fantasy-divider.svg") center / 72% auto no-repeat; }
.cover-title { letter-spacing: 0.22em; font-size: 2.45em; color: #7a3a24; text-shadow: 0 1px 0 #fff6ea; }
.cover-subtitle { letter-spacing: 0.26em; color: #a66c44; }
.cover-author { letter-spacing: 0.34em; color: #3c2a1c; }
.cover-meta { letter-spacing: 0.26em; color: #6b5b4b; }
"""


def color_to_hex(color: Tuple[int, int, int]) -> str:
    """RGB 튜플 → 대문자 #RRGGBB

    Examples:
        >>> color_to_hex((255, 128, 0))
        "#FF8000"
    """
    r, g, b = color[:3]
    return f"#{r:02X}{g:02X}{b:02X}"


def _num(value: float) -> str:
    # 16.0 → "16", 1.5 → "1.5"
    return f"{value:g}"


def _section(name: str) -> str:
    return f"\n\n/* === {name} === */\n"


def load_base_css(base_css_path: Optional[str] = DEFAULT_BASE_CSS_PATH) -> str:
    """기본 스타일시트 로드 (없으면 빈 문자열)"""
    if not base_css_path:
        return ""
    path = Path(base_css_path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError:
        logger.debug(f"Base stylesheet not found: {path}, skipping")
        return ""


def build_typography_css(style: TextStyle) -> str:
    text_color = color_to_hex(style.font_color)
    indent = _num(style.text_indent)
    size = _num(style.font_size)
    return (
        f"body {{ color: {text_color}; font-size: {size}px; }}\n"
        f"p {{ line-height: {_num(style.line_height)}em; margin: 0 0 {_num(style.paragraph_spacing)}em 0; "
        f"text-indent: {indent}em; font-size: {size}px; color: {text_color}; }}\n"
        f"h1 + p, h2 + p, h3 + p, h4 + p, h5 + p, h6 + p {{ text-indent: {indent}em; }}\n"
    )


def build_fantasy_assets_css(style: TextStyle) -> str:
    font_faces = "".join(
        f'@font-face {{ font-family: "{family}"; src: url("fonts/{family}.ttf"); }}\n'
        for family in FANTASY_FONT_FAMILIES
    )
    return (
        font_faces
        + f"p {{ duokan-text-indent: {_num(style.text_indent)}em; }}\n"
        + FANTASY_BACKGROUNDS_CSS
    )


def build_font_css(font: FontAsset) -> str:
    return (
        f'@font-face {{ font-family: "{font.family}"; src: url("fonts/{font.name}"); }}\n'
        f'body, p, li {{ font-family: "{font.family}", "Palatino", "Times New Roman", serif; }}\n'
    )


def build_stylesheet(
    style: TextStyle,
    font: Optional[FontAsset] = None,
    base_css_path: Optional[str] = DEFAULT_BASE_CSS_PATH
) -> str:
    """stylesheet.css 내용 생성

    Args:
        style: 타이포그래피 설정
        font: 내장할 사용자 폰트
        base_css_path: 기본 스타일시트 경로 (없으면 생략)

    Returns:
        CSS 문자열
    """
    template = style.css_template
    parts = [
        load_base_css(base_css_path),
        _section("template"), get_template_css(template),
        _section("typography"), build_typography_css(style),
        _section("cover"), COVER_CSS,
        _section("chapter header"), CHAPTER_HEADER_CSS,
    ]

    if template == CssTemplate.FOLIO:
        parts += [
            _section("folio chapter header overrides"), FOLIO_OVERRIDES_CSS,
            _section("folio cover"), FOLIO_COVER_CSS,
        ]

    if template == CssTemplate.FANTASY:
        parts += [
            _section("fantasy assets"), build_fantasy_assets_css(style),
            _section("fantasy chapter header (duokan)"), FANTASY_DUOKAN_HEADER_CSS,
            _section("fantasy chapter header overrides"), FANTASY_OVERRIDES_CSS,
            _section("fantasy cover"), FANTASY_COVER_CSS,
        ]

    if font is not None:
        parts += [_section("embedded font"), build_font_css(font)]

    custom_css = style.custom_css.strip()
    if custom_css:
        parts += [_section("custom css"), custom_css, "\n"]

    css = "".join(parts)
    logger.debug(f"Stylesheet built: template={template}, {len(css)} chars")
    return css
