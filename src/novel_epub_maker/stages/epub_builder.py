"""EPUB 빌드

EbookLib 기반: 메타데이터, 스타일시트, 표지, 폰트, 템플릿 자산, 챕터, 삽화 페이지,
목차(NCX + nav)를 조립해 아카이브로 기록한다.
"""

import uuid
from pathlib import Path
from typing import List, Optional
from ebooklib import epub
from novel_epub_maker.stages.assets import (
    FANTASY_FONTS, FANTASY_IMAGES, DirectoryTemplateAssets, TemplateAssets, dedupe_image_names
)
from novel_epub_maker.stages.chapter import ChapterDraft
from novel_epub_maker.stages.css_templates import FANTASY_DIVIDER_SVG, FOLIO_DIVIDER_SVG
from novel_epub_maker.stages.epub_templates import (
    create_xhtml_item, gallery_title, render_chapter, render_gallery, render_text_cover
)
from novel_epub_maker.stages.errors import ArchiveError, BuildInputError, BuildIOError
from novel_epub_maker.stages.models import CssTemplate, EpubBuildOptions, ImageAsset
from novel_epub_maker.stages.stylesheet import build_stylesheet
from novel_epub_maker.utils.logger import get_logger
from novel_epub_maker.utils.text_cleaner import generate_filename, normalize_output_dir

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "zh-CN"
FOLIO_DIVIDER_PATH = "ornaments/folio-divider.svg"
FANTASY_DIVIDER_PATH = "ornaments/fantasy-divider.svg"

# epub3 page-list 는 EpubHtml 전용 API 를 호출하므로 끈다
# raise_exceptions 가 없으면 EbookLib 은 기록 실패를 경고로 삼키고 False 를 반환한다
WRITE_OPTIONS = {"epub3_pages": False, "raise_exceptions": True}


def resolve_toc_title(toc_title: Optional[str], language: str) -> str:
    """목차 제목 (지정값 → 중국어/미지정 "目录" → 그 외 "Table Of Contents")"""
    if toc_title and toc_title.strip():
        return toc_title.strip()
    lang = language.strip().lower()
    if not lang or lang.startswith("zh"):
        return "目录"
    return "Table Of Contents"


def book_identifier(title: str, author: str) -> str:
    """제목/저자 기반의 결정적 패키지 식별자"""
    return f"urn:uuid:{uuid.uuid5(uuid.NAMESPACE_URL, f'{title.strip()}|{author.strip()}')}"


class EpubBuilder:
    """EPUB 빌더

    Args:
        options: 빌드 옵션
    """

    def __init__(self, options: EpubBuildOptions):
        self.options = options
        self.info = options.book_info
        self.style = options.style
        self.template = options.style.css_template
        self.language = self.info.language.strip() or DEFAULT_LANGUAGE
        self.template_assets: TemplateAssets = options.template_assets or DirectoryTemplateAssets()

    def _get_output_path(self) -> Path:
        """출력 경로 (디렉토리가 없으면 생성)

        Raises:
            BuildIOError: 디렉토리 생성 실패
        """
        output_dir = normalize_output_dir(self.options.output_dir)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BuildIOError(f"Cannot create output directory: {output_dir} ({e})") from e
        return output_dir / generate_filename(self.info, self.options.filename_template)

    def _set_metadata(self, book: epub.EpubBook) -> None:
        """메타데이터 설정 (빈 값은 생략)"""
        info = self.info
        book.set_identifier(book_identifier(info.title, info.author))

        if info.title.strip():
            book.set_title(info.title.strip())
        if info.author.strip():
            book.add_author(info.author.strip())
        if info.language.strip():
            book.set_language(info.language.strip())
        if info.category.strip():
            book.add_metadata("DC", "subject", info.category.strip())
        if info.description.strip():
            book.add_metadata("DC", "description", info.description.strip())

        for name, value in (
            ("publisher", info.publisher),
            ("identifier", info.isbn),
            ("date", info.publish_date),
        ):
            if value.strip():
                book.add_metadata(None, "meta", "", {"name": name, "content": value.strip()})

    def _add_cover(self, book: epub.EpubBook, cover: ImageAsset) -> None:
        """표지 이미지 추가 (표지로 지정, 별도 페이지는 만들지 않음)"""
        book.set_cover(f"images/{cover.name}", cover.data, create_page=False)
        # set_cover 는 확장자로 MIME 을 추정하므로 감지된 값으로 덮어씀
        book.get_item_with_id("cover-img").media_type = cover.mime
        logger.debug(f"Cover added: images/{cover.name} ({cover.mime})")

    def _add_image(self, book: epub.EpubBook, uid: str, image: ImageAsset) -> None:
        book.add_item(epub.EpubImage(
            uid=uid,
            file_name=f"images/{image.name}",
            media_type=image.mime,
            content=image.data
        ))

    def _reserved_image_names(self) -> List[str]:
        """images/ 아래에 이미 쓰이는 파일명 (표지, 챕터 머리, Fantasy 이미지)"""
        reserved = []
        if self.options.cover is not None:
            reserved.append(self.options.cover.name)
        if self.options.chapter_header_image is not None:
            reserved.append(self.options.chapter_header_image.name)
        if self.template == CssTemplate.FANTASY:
            reserved.extend(FANTASY_IMAGES)
        return reserved

    def _add_template_assets(self, book: epub.EpubBook) -> None:
        """템플릿 장식 자산 추가 (구분선 SVG, Fantasy 이미지/폰트)"""
        if self.template == CssTemplate.FOLIO:
            book.add_item(epub.EpubItem(
                uid="folio-divider",
                file_name=FOLIO_DIVIDER_PATH,
                media_type="image/svg+xml",
                content=FOLIO_DIVIDER_SVG.encode("utf-8")
            ))

        if self.template == CssTemplate.FANTASY:
            book.add_item(epub.EpubItem(
                uid="fantasy-divider",
                file_name=FANTASY_DIVIDER_PATH,
                media_type="image/svg+xml",
                content=FANTASY_DIVIDER_SVG.encode("utf-8")
            ))
            for idx, name in enumerate(FANTASY_IMAGES, start=1):
                book.add_item(epub.EpubImage(
                    uid=f"fantasy-image-{idx:02d}",
                    file_name=f"images/{name}",
                    media_type="image/webp",
                    content=self.template_assets.fantasy_image(name)
                ))
            for name in FANTASY_FONTS:
                book.add_item(epub.EpubItem(
                    uid=f"fantasy-font-{Path(name).stem}",
                    file_name=f"fonts/{name}",
                    media_type="font/ttf",
                    content=self.template_assets.fantasy_font(name)
                ))
            logger.debug(f"Fantasy assets added: {len(FANTASY_IMAGES)} images, {len(FANTASY_FONTS)} fonts")

    def build(self, chapters: List[ChapterDraft]) -> str:
        """EPUB 생성

        Args:
            chapters: 챕터 초안 목록

        Returns:
            생성된 EPUB 파일 경로

        Raises:
            BuildInputError: 챕터 없음
            BuildIOError: 출력 디렉토리 / 자산 읽기 / 파일 기록 실패
            ArchiveError: 아카이브 기록 실패
        """
        if not chapters:
            raise BuildInputError("No chapters to build.")

        options = self.options
        output_path = self._get_output_path()

        book = epub.EpubBook()
        book.FOLDER_NAME = "OEBPS"

        # 1. 메타데이터
        self._set_metadata(book)
        toc_title = resolve_toc_title(options.toc.toc_title, self.info.language)

        # 2. 스타일시트
        book.add_item(epub.EpubItem(
            uid="style",
            file_name="stylesheet.css",
            media_type="text/css",
            content=build_stylesheet(self.style, options.font, options.base_css_path).encode("utf-8")
        ))

        # 3. 표지 / 폰트 / 챕터 머리 이미지 / 템플릿 자산 / 삽화
        if options.cover is not None:
            self._add_cover(book, options.cover)

        if options.font is not None:
            book.add_item(epub.EpubItem(
                uid="font-custom",
                file_name=f"fonts/{options.font.name}",
                media_type=options.font.mime,
                content=options.font.data
            ))

        if options.chapter_header_image is not None:
            self._add_image(book, "chapter-header", options.chapter_header_image)

        self._add_template_assets(book)

        gallery_images = dedupe_image_names(options.images, self._reserved_image_names())
        for idx, image in enumerate(gallery_images, start=1):
            self._add_image(book, f"gallery-{idx:04d}", image)

        spine: list = []
        toc: list = []

        # 4. 이미지 표지가 없으면 텍스트 표지
        if options.cover is None:
            cover_page = create_xhtml_item("cover.xhtml", render_text_cover(self.info, self.language, self.template))
            book.add_item(cover_page)
            spine.append(cover_page)

        # 5. 목차 페이지 (본문 순서 포함 여부)
        if options.toc.inline_toc:
            spine.append("nav")

        # 6. 챕터
        for idx, chapter in enumerate(chapters, start=1):
            file_name = f"chapter_{idx:04d}.xhtml"
            content = render_chapter(
                chapter, self.language, self.style, self.template, idx,
                options.chapter_header_image, options.chapter_header_fullbleed
            )
            item = create_xhtml_item(file_name, content)
            book.add_item(item)
            spine.append(item)
            toc.append(epub.Link(file_name, chapter.title, item.id))

        # 7. 삽화 페이지
        if options.include_images_section and gallery_images:
            gallery = create_xhtml_item(
                "images.xhtml",
                render_gallery(gallery_images, self.language, gallery_title(self.info.language))
            )
            book.add_item(gallery)
            spine.append(gallery)
            if options.toc.gallery_in_toc:
                toc.append(epub.Link("images.xhtml", gallery_title(self.info.language), gallery.id))

        book.toc = toc
        book.add_item(epub.EpubNcx())
        book.add_item(epub.EpubNav(title=toc_title))
        book.spine = spine

        # 8. 기록
        try:
            written = epub.write_epub(str(output_path), book, WRITE_OPTIONS)
        except OSError as e:
            raise BuildIOError(f"Cannot write EPUB file: {output_path} ({e})") from e
        except Exception as e:
            raise ArchiveError(f"Failed to write EPUB: {output_path} ({e})") from e

        if written is False or not output_path.is_file():
            raise BuildIOError(f"EPUB file was not written: {output_path}")

        logger.info(f"✅ EPUB created: {output_path} ({len(chapters)} chapters)")
        return str(output_path)


def build_epub(chapters: List[ChapterDraft], options: EpubBuildOptions) -> str:
    """챕터 목록과 옵션으로 EPUB 생성 후 경로 반환"""
    return EpubBuilder(options).build(chapters)
