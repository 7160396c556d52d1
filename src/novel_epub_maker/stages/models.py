"""변환 데이터 모델

도서 정보, 스타일, 자산(이미지/폰트), 목차 옵션, 빌드 옵션 정의
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from novel_epub_maker.stages.assets import TemplateAssets

DEFAULT_FILENAME_TEMPLATE = "{书名}_{作者}.epub"
DEFAULT_BASE_CSS_PATH = "assets/book/book.css"


class ConversionMethod(Enum):
    """챕터 분할 방식"""
    REGEX = "regex"
    CUSTOM_CONFIG = "custom_config"
    SIMPLE_RULES = "simple_rules"

    @classmethod
    def from_name(cls, name: str) -> "ConversionMethod":
        key = name.strip().lower().replace("-", "_")
        for method in cls:
            if method.value == key:
                return method
        raise ValueError(f"Unknown conversion method: {name}")


class CssTemplate(Enum):
    """시각 템플릿 (각각 고정 타이포그래피 CSS 블록을 가짐)"""
    CLASSIC = "Classic"
    MODERN = "Modern"
    CLEAN = "Clean"
    ELEGANT = "Elegant"
    FOLIO = "Folio"
    FANTASY = "Fantasy"
    MINIMAL = "Minimal"

    @classmethod
    def from_name(cls, name: str) -> "CssTemplate":
        """대소문자 구분 없이 템플릿 이름 해석

        Raises:
            ValueError: 알 수 없는 템플릿 이름
        """
        key = name.strip().lower()
        for template in cls:
            if template.value.lower() == key:
                return template
        raise ValueError(f"Unknown CSS template: {name}")

    def __str__(self):
        return self.value


@dataclass
class BookInfo:
    """도서 메타데이터 (빈 문자열 = 생략)"""
    author: str = ""
    title: str = ""
    language: str = ""
    publisher: str = ""
    isbn: str = ""
    category: str = ""
    publish_date: str = ""
    description: str = ""


@dataclass
class TextStyle:
    """본문 타이포그래피 설정

    Attributes:
        line_height: 줄 간격 (em)
        paragraph_spacing: 문단 간격 (em)
        text_indent: 들여쓰기 (em)
        font_size: 글자 크기 (px)
        font_color: RGB 튜플
        font_path: 사용자 폰트 경로 (빈 문자열 = 없음)
        css_template: 시각 템플릿
        custom_css: 스타일시트 끝에 덧붙일 CSS
        extra_*_class: 렌더링 요소에 추가할 클래스
    """
    line_height: float = 1.5
    paragraph_spacing: float = 1.0
    text_indent: float = 2.0
    font_size: float = 16.0
    font_color: Tuple[int, int, int] = (0, 0, 0)
    font_path: str = ""
    css_template: CssTemplate = CssTemplate.CLASSIC
    custom_css: str = ""
    extra_body_class: str = ""
    extra_chapter_class: str = ""
    extra_title_class: str = ""
    extra_paragraph_class: str = ""


@dataclass
class ImageAsset:
    """EPUB에 포함될 이미지"""
    name: str
    data: bytes
    mime: str
    caption: Optional[str] = None

    def __repr__(self):
        return f"<ImageAsset {self.name} ({self.mime}, {len(self.data)} bytes)>"


@dataclass
class FontAsset:
    """EPUB에 포함될 폰트"""
    name: str
    family: str
    data: bytes
    mime: str

    def __repr__(self):
        return f"<FontAsset {self.family} ({self.name}, {len(self.data)} bytes)>"


@dataclass
class TocOptions:
    """목차 옵션

    Attributes:
        inline_toc: 내비게이션 페이지를 본문 순서에 포함할지
        toc_title: 목차 제목 (None/공백이면 언어별 기본값)
        gallery_in_toc: 삽화 페이지를 목차에 넣을지
    """
    inline_toc: bool = True
    toc_title: Optional[str] = None
    gallery_in_toc: bool = True


@dataclass
class EpubBuildOptions:
    """EPUB 빌드에 필요한 전체 옵션"""
    book_info: BookInfo
    output_dir: str = "."
    filename_template: str = DEFAULT_FILENAME_TEMPLATE
    style: TextStyle = field(default_factory=TextStyle)
    cover: Optional[ImageAsset] = None
    images: List[ImageAsset] = field(default_factory=list)
    font: Optional[FontAsset] = None
    chapter_header_image: Optional[ImageAsset] = None
    chapter_header_fullbleed: bool = False
    include_images_section: bool = True
    toc: TocOptions = field(default_factory=TocOptions)
    template_assets: Optional["TemplateAssets"] = None
    base_css_path: Optional[str] = DEFAULT_BASE_CSS_PATH
