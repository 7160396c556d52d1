"""EPUB 자산 로더

- 템플릿 번들 자산 (Fantasy 이미지/폰트) 제공자
- 표지 / 챕터 머리 / 삽화 / 사용자 폰트 파일 로더
"""

import io
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union
from PIL import Image, UnidentifiedImageError
from novel_epub_maker.stages.errors import BuildIOError
from novel_epub_maker.stages.models import FontAsset, ImageAsset
from novel_epub_maker.utils.logger import get_logger
from novel_epub_maker.utils.text_cleaner import sanitize_resource_name

logger = get_logger(__name__)

DEFAULT_ASSETS_DIR = "assets"

FANTASY_IMAGES = [
    "头图.webp", "头图1.webp", "4star.webp", "ttl.webp", "ttr.webp",
    "背景.webp", "背景1.webp", "纹理.webp", "纸纹.webp",
]
FANTASY_FONTS = ["kt.ttf", "rbs.ttf", "dbs.ttf", "ys.ttf", "hyss.ttf"]

IMAGE_MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "gif": "image/gif",
    "png": "image/png",
}


def image_mime_from_extension(ext: str) -> str:
    """이미지 확장자 → MIME (알 수 없으면 image/png)"""
    return IMAGE_MIME_TYPES.get(ext.lower().lstrip("."), "image/png")


def font_mime_from_extension(ext: str) -> str:
    """폰트 확장자 → MIME (otf 외에는 font/ttf)"""
    return "font/otf" if ext.lower().lstrip(".") == "otf" else "font/ttf"


def detect_image_mime(data: bytes, ext: str = "") -> str:
    """이미지 MIME 판정

    확장자가 알려진 형식이면 그대로 쓰고, 아니면 Pillow 로 내용을 확인한다.
    """
    ext = ext.lower().lstrip(".")
    if ext in IMAGE_MIME_TYPES:
        return IMAGE_MIME_TYPES[ext]

    try:
        with Image.open(io.BytesIO(data)) as img:
            mime = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        mime = None

    if mime:
        logger.debug(f"Image type detected from content: {mime}")
        return mime
    return "image/png"


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise BuildIOError(f"Cannot read asset: {path} ({e})") from e


def _image_from_path(path: Union[str, Path], base_name: str) -> Optional[ImageAsset]:
    path = Path(path)
    data = _read_bytes(path)
    if not data:
        return None
    ext = (path.suffix.lstrip(".") or "png").lower()
    return ImageAsset(name=f"{base_name}.{ext}", data=data, mime=detect_image_mime(data, ext))


def cover_asset_from_path(path: Union[str, Path]) -> Optional[ImageAsset]:
    """표지 이미지 로드 (cover.<ext>, 빈 파일이면 None)"""
    return _image_from_path(path, "cover")


def chapter_header_asset_from_path(path: Union[str, Path]) -> Optional[ImageAsset]:
    """챕터 머리 이미지 로드 (chapter-header.<ext>, 빈 파일이면 None)"""
    return _image_from_path(path, "chapter-header")


def image_asset_from_bytes(
    data: bytes,
    index: int,
    file_name: Optional[str] = None,
    caption: Optional[str] = None
) -> Optional[ImageAsset]:
    """삽화 하나 생성

    Args:
        data: 이미지 바이트
        index: 0부터 시작하는 순번 (이름이 없을 때 image_0001.png 형식)
        file_name: 원본 파일명
        caption: 캡션

    Returns:
        ImageAsset (빈 데이터면 None)
    """
    if not data:
        return None

    if file_name:
        ext = Path(file_name).suffix.lstrip(".") or "png"
        name = sanitize_resource_name(Path(file_name).name)
        mime = detect_image_mime(data, ext)
    else:
        name = f"image_{index + 1:04d}.png"
        mime = "image/png"

    return ImageAsset(name=name, data=data, mime=mime, caption=caption or None)


def dedupe_image_names(images: List[ImageAsset], reserved: Iterable[str] = ()) -> List[ImageAsset]:
    """겹치는 삽화 파일명을 stem_2.ext, stem_3.ext ... 로 바꿈

    Args:
        images: 삽화 목록 (순서 유지)
        reserved: 이미 images/ 아래에 쓰이는 이름 (표지, 챕터 머리 이미지 등)
    """
    used = {name.lower() for name in reserved}
    result = []
    for image in images:
        name = image.name
        if name.lower() in used:
            path = Path(image.name)
            counter = 2
            while f"{path.stem}_{counter}{path.suffix}".lower() in used:
                counter += 1
            name = f"{path.stem}_{counter}{path.suffix}"
            logger.debug(f"Duplicate image name renamed: {image.name} -> {name}")
            image = replace(image, name=name)
        used.add(name.lower())
        result.append(image)
    return result


def load_image_assets(paths: List[Union[str, Path]], captions: Optional[List[str]] = None) -> List[ImageAsset]:
    """삽화 파일 목록 로드 (빈 파일은 건너뜀)"""
    captions = captions or []
    images = []
    for idx, path in enumerate(paths):
        path = Path(path)
        caption = captions[idx] if idx < len(captions) else None
        asset = image_asset_from_bytes(_read_bytes(path), idx, path.name, caption)
        if asset is not None:
            images.append(asset)
    images = dedupe_image_names(images)
    logger.debug(f"Gallery images loaded: {len(images)}/{len(paths)}")
    return images


def load_font_asset(path: Union[str, Path]) -> FontAsset:
    """사용자 폰트 로드 (family = 파일명 stem)

    Raises:
        BuildIOError: 파일 읽기 실패
    """
    path = Path(path)
    data = _read_bytes(path)
    ext = path.suffix.lstrip(".") or "ttf"
    return FontAsset(
        name=sanitize_resource_name(path.name) or "custom-font.ttf",
        family=path.stem or "CustomFont",
        data=data,
        mime=font_mime_from_extension(ext),
    )


class TemplateAssets:
    """템플릿 번들 자산 제공자 (아카이브 내 경로 → 바이트)"""

    def fantasy_image(self, name: str) -> bytes:
        raise NotImplementedError

    def fantasy_font(self, name: str) -> bytes:
        raise NotImplementedError


class DirectoryTemplateAssets(TemplateAssets):
    """디스크의 <root>/fantasy/{images,fonts}/ 에서 읽는 제공자

    Args:
        root: 자산 루트 디렉토리 (기본 assets)
    """

    def __init__(self, root: Union[str, Path] = DEFAULT_ASSETS_DIR):
        self.root = Path(root)

    def fantasy_image(self, name: str) -> bytes:
        return _read_bytes(self.root / "fantasy" / "images" / name)

    def fantasy_font(self, name: str) -> bytes:
        return _read_bytes(self.root / "fantasy" / "fonts" / name)


class InMemoryTemplateAssets(TemplateAssets):
    """메모리에 주입된 바이트를 쓰는 제공자

    Args:
        files: {"images/头图.webp": b"...", "fonts/kt.ttf": b"..."}
    """

    def __init__(self, files: Dict[str, bytes]):
        self.files = dict(files)

    def _get(self, key: str) -> bytes:
        if key not in self.files:
            raise BuildIOError(f"Template asset not found: {key}")
        return self.files[key]

    def fantasy_image(self, name: str) -> bytes:
        return self._get(f"images/{name}")

    def fantasy_font(self, name: str) -> bytes:
        return self._get(f"fonts/{name}")
