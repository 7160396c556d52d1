"""스타일시트 생성 테스트"""

import tempfile
from pathlib import Path

from novel_epub_maker.stages.css_templates import CLASSIC_CSS, get_template_css
from novel_epub_maker.stages.models import CssTemplate, FontAsset, TextStyle
from novel_epub_maker.stages.stylesheet import (
    COVER_CSS, build_stylesheet, build_typography_css, color_to_hex, load_base_css
)


def test_section_order():
    """템플릿 → 타이포그래피 → 표지 → 챕터 머리"""
    css = build_stylesheet(TextStyle(), base_css_path=None)

    positions = [
        css.index("/* === template === */"),
        css.index("/* === typography === */"),
        css.index("/* === cover === */"),
        css.index("/* === chapter header === */"),
    ]
    assert positions == sorted(positions)
    assert css.startswith("\n\n/* === template === */\n")
    assert CLASSIC_CSS in css
    assert COVER_CSS in css
    assert "folio" not in css
    assert "fantasy" not in css
    assert "custom css" not in css

    print("✅ Section order test passed!")


def test_typography():
    """숫자는 불필요한 소수점 없이 출력"""
    css = build_typography_css(TextStyle())
    assert "body { color: #000000; font-size: 16px; }" in css
    assert "p { line-height: 1.5em; margin: 0 0 1em 0; text-indent: 2em; font-size: 16px; color: #000000; }" in css

    style = TextStyle(line_height=1.75, text_indent=0.5, font_size=18.5, font_color=(255, 128, 0))
    css = build_typography_css(style)
    assert "color: #FF8000; font-size: 18.5px;" in css
    assert "line-height: 1.75em;" in css
    assert "h1 + p, h2 + p, h3 + p, h4 + p, h5 + p, h6 + p { text-indent: 0.5em; }" in css

    assert color_to_hex((0, 15, 255)) == "#000FFF"


def test_folio_sections():
    css = build_stylesheet(TextStyle(css_template=CssTemplate.FOLIO), base_css_path=None)

    assert css.index("/* === chapter header === */") < css.index("/* === folio chapter header overrides === */")
    assert css.index("/* === folio chapter header overrides === */") < css.index("/* === folio cover === */")
    assert 'url("ornaments/folio-divider.svg")' in css
    assert get_template_css(CssTemplate.FOLIO) in css


def test_fantasy_sections():
    """Fantasy: 폰트 선언 5개 + 배경 + 머리 + 표지"""
    css = build_stylesheet(TextStyle(css_template=CssTemplate.FANTASY, text_indent=2.0), base_css_path=None)

    for family in ("kt", "rbs", "dbs", "ys", "hyss"):
        assert f'@font-face {{ font-family: "{family}"; src: url("fonts/{family}.ttf"); }}' in css
    assert "p { duokan-text-indent: 2em; }" in css
    assert 'url("images/纹理.webp")' in css

    order = [
        "/* === fantasy assets === */",
        "/* === fantasy chapter header (duokan) === */",
        "/* === fantasy chapter header overrides === */",
        "/* === fantasy cover === */",
    ]
    positions = [css.index(marker) for marker in order]
    assert positions == sorted(positions)

    print("✅ Fantasy stylesheet test passed!")


def test_font_and_custom_css_last():
    """사용자 폰트 뒤에 사용자 CSS"""
    font = FontAsset(name="MyFont.otf", family="MyFont", data=b"otf", mime="font/otf")
    style = TextStyle(custom_css="  .x { color: red; }  ")
    css = build_stylesheet(style, font, base_css_path=None)

    assert '@font-face { font-family: "MyFont"; src: url("fonts/MyFont.otf"); }' in css
    assert 'body, p, li { font-family: "MyFont", "Palatino", "Times New Roman", serif; }' in css
    assert css.index("/* === embedded font === */") < css.index("/* === custom css === */")
    assert css.endswith("/* === custom css === */\n.x { color: red; }\n")


def test_base_css():
    """기본 스타일시트는 맨 앞, 없으면 생략"""
    with tempfile.TemporaryDirectory() as tmp:
        base = Path(tmp) / "book.css"
        base.write_text("html { margin: 0; }", encoding="utf-8")

        css = build_stylesheet(TextStyle(), base_css_path=str(base))
        assert css.startswith("html { margin: 0; }\n\n/* === template === */")

        missing = str(Path(tmp) / "missing.css")
        assert load_base_css(missing) == ""
        assert build_stylesheet(TextStyle(), base_css_path=missing).startswith("\n\n/* === template === */")

    assert load_base_css(None) == ""


def main():
    """테스트 실행"""
    print("=" * 50)
    print("Stylesheet Tests")
    print("=" * 50)

    test_section_order()
    test_typography()
    test_folio_sections()
    test_fantasy_sections()
    test_font_and_custom_css_last()
    test_base_css()

    print("✅ All tests passed!")


if __name__ == "__main__":
    main()
