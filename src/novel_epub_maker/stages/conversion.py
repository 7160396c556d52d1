"""변환 파사드

원고 텍스트 + 옵션 → 챕터 분할(또는 편집된 챕터 목록) → EPUB 빌드
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Union
from novel_epub_maker.stages.assets import TemplateAssets
from novel_epub_maker.stages.chapter import ChapterDraft
from novel_epub_maker.stages.epub_builder import build_epub
from novel_epub_maker.stages.errors import BuildError, BuildFailedError, InvalidInputError
from novel_epub_maker.stages.models import (
    BookInfo, ConversionMethod, EpubBuildOptions, FontAsset, ImageAsset, TextStyle, TocOptions,
    DEFAULT_BASE_CSS_PATH, DEFAULT_FILENAME_TEMPLATE
)
from novel_epub_maker.stages.splitter import split_chapters
from novel_epub_maker.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ConversionRequest:
    """변환 요청

    Attributes:
        text: 원고 전문
        method: 분할 방식
        custom_regex: REGEX 방식의 사용자 정규식
        custom_config_path: CUSTOM_CONFIG 방식의 정규식 설정 파일
        chapters_override: 미리보기에서 편집된 챕터 목록 (있으면 분할 생략)
        나머지: EpubBuildOptions 와 동일
    """
    text: str
    book_info: BookInfo = field(default_factory=BookInfo)
    method: ConversionMethod = ConversionMethod.REGEX
    custom_regex: str = ""
    custom_config_path: Optional[Union[str, Path]] = None
    output_dir: str = "."
    filename_template: str = DEFAULT_FILENAME_TEMPLATE
    style: TextStyle = field(default_factory=TextStyle)
    cover: Optional[ImageAsset] = None
    images: List[ImageAsset] = field(default_factory=list)
    font: Optional[FontAsset] = None
    chapter_header_image: Optional[ImageAsset] = None
    chapter_header_fullbleed: bool = False
    chapters_override: Optional[List[ChapterDraft]] = None
    include_images_section: bool = True
    toc: TocOptions = field(default_factory=TocOptions)
    template_assets: Optional[TemplateAssets] = None
    base_css_path: Optional[str] = DEFAULT_BASE_CSS_PATH


@dataclass
class ConversionResult:
    """변환 결과"""
    output_path: str
    chapter_count: int


class EpubPlanBuilder:
    """빌드 옵션을 단계적으로 조립하는 빌더

    Example:
        >>> path = (EpubPlanBuilder(BookInfo(title="书", author="某"))
        ...         .output_dir("out")
        ...         .inline_toc(False)
        ...         .build(chapters))
    """

    def __init__(self, book_info: BookInfo):
        self._options = EpubBuildOptions(book_info=book_info)

    def _set(self, **changes) -> "EpubPlanBuilder":
        self._options = replace(self._options, **changes)
        return self

    def output_dir(self, output_dir: Union[str, Path]) -> "EpubPlanBuilder":
        return self._set(output_dir=str(output_dir))

    def filename_template(self, template: str) -> "EpubPlanBuilder":
        return self._set(filename_template=template)

    def style(self, style: TextStyle) -> "EpubPlanBuilder":
        return self._set(style=style)

    def cover(self, cover: Optional[ImageAsset]) -> "EpubPlanBuilder":
        return self._set(cover=cover)

    def images(self, images: List[ImageAsset]) -> "EpubPlanBuilder":
        return self._set(images=list(images))

    def font(self, font: Optional[FontAsset]) -> "EpubPlanBuilder":
        return self._set(font=font)

    def chapter_header_image(self, image: Optional[ImageAsset]) -> "EpubPlanBuilder":
        return self._set(chapter_header_image=image)

    def chapter_header_fullbleed(self, fullbleed: bool) -> "EpubPlanBuilder":
        return self._set(chapter_header_fullbleed=fullbleed)

    def include_images_section(self, include: bool) -> "EpubPlanBuilder":
        return self._set(include_images_section=include)

    def inline_toc(self, inline: bool) -> "EpubPlanBuilder":
        return self._set(toc=replace(self._options.toc, inline_toc=inline))

    def toc_title(self, title: Optional[str]) -> "EpubPlanBuilder":
        return self._set(toc=replace(self._options.toc, toc_title=title))

    def gallery_in_toc(self, enabled: bool) -> "EpubPlanBuilder":
        return self._set(toc=replace(self._options.toc, gallery_in_toc=enabled))

    def template_assets(self, assets: Optional[TemplateAssets]) -> "EpubPlanBuilder":
        return self._set(template_assets=assets)

    def base_css_path(self, path: Optional[str]) -> "EpubPlanBuilder":
        return self._set(base_css_path=path)

    def build_options(self) -> EpubBuildOptions:
        return self._options

    def build(self, chapters: List[ChapterDraft]) -> str:
        """EPUB 빌드

        Raises:
            BuildFailedError: 빌드 단계 실패 (cause 에 BuildError)
        """
        try:
            return build_epub(chapters, self._options)
        except BuildError as e:
            raise BuildFailedError(e) from e


def convert(request: ConversionRequest) -> ConversionResult:
    """원고를 EPUB 으로 변환

    Args:
        request: 변환 요청

    Returns:
        ConversionResult

    Raises:
        InvalidInputError: 빈 텍스트 또는 챕터 없음
        PatternError: 정규식 오류
        ConversionIOError: 정규식 설정 파일 읽기 실패
        BuildFailedError: 빌드 실패
    """
    if not request.text.strip():
        raise InvalidInputError("Text content is empty.")

    if request.chapters_override is not None:
        chapters = list(request.chapters_override)
        logger.info(f"Using edited chapter list: {len(chapters)} chapters")
    else:
        chapters = split_chapters(
            request.text, request.method, request.custom_regex, request.custom_config_path
        )

    if not chapters:
        raise InvalidInputError("No chapters detected.")

    output_path = (
        EpubPlanBuilder(request.book_info)
        .output_dir(request.output_dir)
        .filename_template(request.filename_template)
        .style(request.style)
        .cover(request.cover)
        .images(request.images)
        .font(request.font)
        .chapter_header_image(request.chapter_header_image)
        .chapter_header_fullbleed(request.chapter_header_fullbleed)
        .include_images_section(request.include_images_section)
        .inline_toc(request.toc.inline_toc)
        .toc_title(request.toc.toc_title)
        .gallery_in_toc(request.toc.gallery_in_toc)
        .template_assets(request.template_assets)
        .base_css_path(request.base_css_path)
        .build(chapters)
    )
    return ConversionResult(output_path=output_path, chapter_count=len(chapters))
