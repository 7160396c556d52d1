"""CLI 인터페이스

Typer 기반 명령줄 인터페이스, Rich 기반 출력
"""

import typer
import chardet
from pathlib import Path
from typing import List, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from novel_epub_maker.config.loader import Config, get_config, load_config
from novel_epub_maker.stages.assets import (
    DirectoryTemplateAssets, chapter_header_asset_from_path, cover_asset_from_path,
    load_font_asset, load_image_assets
)
from novel_epub_maker.stages.conversion import ConversionRequest, convert
from novel_epub_maker.stages.epub_templates import format_chapter_heading
from novel_epub_maker.stages.errors import BuildError, ConversionError
from novel_epub_maker.stages.models import BookInfo, ConversionMethod, CssTemplate, TocOptions
from novel_epub_maker.stages.splitter import chapter_signature, split_chapters
from novel_epub_maker.utils.logger import get_logger, setup_logging
from novel_epub_maker.utils.text_cleaner import parse_filename_to_book_info

logger = get_logger(__name__)
console = Console()
app = typer.Typer(help="Novel EPUB Maker - TXT 소설을 스타일 EPUB 으로 변환")

ENCODING_CONFIDENCE = 0.7
FALLBACK_ENCODINGS = ["gb18030", "big5", "cp949"]


def detect_encoding(data: bytes) -> Optional[str]:
    """원고 인코딩 감지 (신뢰도 0.7 초과일 때만)"""
    result = chardet.detect(data[:65536])
    encoding = result.get("encoding")
    confidence = result.get("confidence") or 0

    if encoding and confidence > ENCODING_CONFIDENCE:
        logger.debug(f"Encoding detected: {encoding} ({confidence:.2f})")
        return encoding

    logger.debug(f"Low confidence encoding: {encoding} ({confidence:.2f})")
    return None


def read_manuscript(path: Path, encoding: Optional[str] = None) -> str:
    """원고 읽기 (지정 인코딩 → UTF-8 → 감지 결과 → 후보 인코딩 순)

    Raises:
        UnicodeDecodeError: 모든 후보로 디코딩 실패
    """
    data = path.read_bytes()
    if encoding:
        return data.decode(encoding)

    candidates = ["utf-8-sig", detect_encoding(data)] + FALLBACK_ENCODINGS
    last_error: Optional[UnicodeDecodeError] = None
    for candidate in candidates:
        if not candidate:
            continue
        try:
            text = data.decode(candidate)
        except UnicodeDecodeError as e:
            last_error = e
            continue
        except LookupError:
            logger.debug(f"Unknown codec from detector: {candidate}")
            continue
        logger.info(f"Manuscript decoded as {candidate}: {path.name}")
        return text

    raise last_error or UnicodeDecodeError("utf-8", data, 0, 1, "unable to decode manuscript")


def _load_config(config_path: Optional[Path]) -> Config:
    return load_config(str(config_path)) if config_path else get_config()


def _parse_method(method: str) -> ConversionMethod:
    try:
        return ConversionMethod.from_name(method)
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.command("convert")
def convert_command(
    input_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="원고 TXT 파일"),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="출력 디렉토리"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="책 제목 (기본: 파일명에서 추정)"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="저자 (기본: 파일명에서 추정)"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="언어 코드 (zh-CN, en ...)"),
    publisher: str = typer.Option("", "--publisher", help="출판사"),
    isbn: str = typer.Option("", "--isbn", help="ISBN"),
    category: str = typer.Option("", "--category", help="분류"),
    publish_date: str = typer.Option("", "--date", help="출판일"),
    description: str = typer.Option("", "--description", help="소개"),
    method: str = typer.Option("regex", "--method", "-m", help="분할 방식: regex / custom_config / simple_rules"),
    regex: str = typer.Option("", "--regex", "-r", help="사용자 챕터 정규식 (regex 방식)"),
    regex_config: Optional[Path] = typer.Option(None, "--regex-config", help="정규식 설정 파일 (custom_config 방식)"),
    template: Optional[str] = typer.Option(None, "--template", help="CSS 템플릿"),
    filename_template: Optional[str] = typer.Option(None, "--filename", help="파일명 템플릿 ({书名} {作者} {日期})"),
    cover: Optional[Path] = typer.Option(None, "--cover", help="표지 이미지"),
    images: Optional[List[Path]] = typer.Option(None, "--image", help="삽화 이미지 (여러 번 지정 가능)"),
    font: Optional[Path] = typer.Option(None, "--font", help="내장할 폰트 (ttf/otf)"),
    header_image: Optional[Path] = typer.Option(None, "--header-image", help="챕터 머리 이미지"),
    fullbleed: bool = typer.Option(False, "--fullbleed", help="챕터 머리 이미지 전폭 표시"),
    no_gallery: bool = typer.Option(False, "--no-gallery", help="삽화 페이지 생략"),
    no_inline_toc: bool = typer.Option(False, "--no-inline-toc", help="목차 페이지를 본문 순서에서 제외"),
    toc_title: Optional[str] = typer.Option(None, "--toc-title", help="목차 제목"),
    encoding: Optional[str] = typer.Option(None, "--encoding", "-e", help="원고 인코딩 (기본: 자동 감지)"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="설정 파일"),
):
    """TXT 원고를 EPUB 으로 변환"""
    config = _load_config(config_path)
    setup_logging(config.logging.file_level, config.logging.console_level, config.paths.logs)
    console.print(Panel.fit("📖 EPUB 변환", style="bold blue"))

    guessed_title, guessed_author = parse_filename_to_book_info(input_file.name)
    book_info = BookInfo(
        title=title if title is not None else guessed_title,
        author=author if author is not None else guessed_author,
        language=language if language is not None else config.epub.language,
        publisher=publisher,
        isbn=isbn,
        category=category,
        publish_date=publish_date,
        description=description,
    )

    try:
        style = config.to_text_style()
        if template:
            style.css_template = CssTemplate.from_name(template)
        if font:
            style.font_path = str(font)
    except ValueError as e:
        raise typer.BadParameter(str(e))

    try:
        text = read_manuscript(input_file, encoding)
        request = ConversionRequest(
            text=text,
            book_info=book_info,
            method=_parse_method(method),
            custom_regex=regex,
            custom_config_path=regex_config,
            output_dir=str(output_dir) if output_dir else config.paths.output_folder,
            filename_template=filename_template or config.epub.filename_template,
            style=style,
            cover=cover_asset_from_path(cover) if cover else None,
            images=load_image_assets(images or []),
            font=load_font_asset(font) if font else None,
            chapter_header_image=chapter_header_asset_from_path(header_image) if header_image else None,
            chapter_header_fullbleed=fullbleed,
            include_images_section=config.epub.include_images_section and not no_gallery,
            toc=TocOptions(
                inline_toc=config.epub.inline_toc and not no_inline_toc,
                toc_title=toc_title if toc_title is not None else (config.epub.toc_title or None),
                gallery_in_toc=config.epub.gallery_in_toc,
            ),
            template_assets=DirectoryTemplateAssets(config.paths.assets_dir),
            base_css_path=config.paths.base_css,
        )
        result = convert(request)
    except (ConversionError, BuildError, UnicodeDecodeError, LookupError) as e:
        logger.error(f"Conversion failed: {e}")
        console.print(f"[bold red]❌ 변환 실패:[/bold red] {e}")
        raise typer.Exit(code=1)

    table = Table(title="변환 결과")
    table.add_column("항목", style="cyan")
    table.add_column("값", style="green")
    table.add_row("제목", book_info.title or "Untitled")
    table.add_row("저자", book_info.author or "Unknown")
    table.add_row("템플릿", str(style.css_template))
    table.add_row("챕터 수", str(result.chapter_count))
    table.add_row("출력 파일", result.output_path)
    console.print(table)
    console.print(f"\n✅ EPUB 파일이 생성되었습니다: [green]{result.output_path}[/green]")


@app.command()
def preview(
    input_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="원고 TXT 파일"),
    method: str = typer.Option("regex", "--method", "-m", help="분할 방식: regex / custom_config / simple_rules"),
    regex: str = typer.Option("", "--regex", "-r", help="사용자 챕터 정규식"),
    regex_config: Optional[Path] = typer.Option(None, "--regex-config", help="정규식 설정 파일"),
    language: str = typer.Option("zh-CN", "--language", "-l", help="제목 표시 언어"),
    limit: Optional[int] = typer.Option(None, "--limit", help="표시할 최대 챕터 수"),
    encoding: Optional[str] = typer.Option(None, "--encoding", "-e", help="원고 인코딩"),
):
    """챕터 분할 미리보기"""
    console.print(Panel.fit("🔍 챕터 미리보기", style="bold blue"))

    split_method = _parse_method(method)
    try:
        text = read_manuscript(input_file, encoding)
        chapters = split_chapters(text, split_method, regex, regex_config)
    except (ConversionError, UnicodeDecodeError, LookupError) as e:
        console.print(f"[bold red]❌ 분할 실패:[/bold red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=f"챕터 {len(chapters)}개")
    table.add_column("#", style="dim", justify="right")
    table.add_column("제목", style="cyan")
    table.add_column("머리", style="magenta")
    table.add_column("글자 수", style="green", justify="right")

    shown = chapters[:limit] if limit else chapters
    for idx, chapter in enumerate(shown, start=1):
        label, heading = format_chapter_heading(chapter.title, language)
        table.add_row(str(idx), chapter.title, f"{label} / {heading}" if heading else label, str(len(chapter.content)))

    console.print(table)
    signature = chapter_signature(text, split_method, regex, regex_config)
    console.print(f"[dim]signature: {signature}[/dim]")


@app.command()
def templates():
    """사용 가능한 CSS 템플릿 목록"""
    table = Table(title="CSS 템플릿")
    table.add_column("이름", style="cyan")
    table.add_column("비고", style="green")
    notes = {
        CssTemplate.FOLIO: "장식 구분선 SVG 포함",
        CssTemplate.FANTASY: "번들 이미지/폰트 필요 (assets/fantasy)",
    }
    for template in CssTemplate:
        table.add_row(template.value, notes.get(template, ""))
    console.print(table)


if __name__ == "__main__":
    app()
