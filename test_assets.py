"""EPUB 자산 로더 테스트

표지 / 챕터 머리 / 삽화 / 폰트 로더와 템플릿 자산 제공자 검증
"""

import io
import tempfile
from pathlib import Path

from PIL import Image

from novel_epub_maker.stages.assets import (
    DirectoryTemplateAssets, InMemoryTemplateAssets, chapter_header_asset_from_path,
    cover_asset_from_path, detect_image_mime, font_mime_from_extension, image_asset_from_bytes,
    dedupe_image_names, image_mime_from_extension, load_font_asset, load_image_assets
)
from novel_epub_maker.stages.errors import BuildIOError
from novel_epub_maker.stages.models import ImageAsset


def _image_bytes(fmt: str) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), (200, 30, 30)).save(buf, format=fmt)
    return buf.getvalue()


def test_mime_maps():
    assert image_mime_from_extension("JPG") == "image/jpeg"
    assert image_mime_from_extension(".webp") == "image/webp"
    assert image_mime_from_extension("bmp") == "image/png"
    assert font_mime_from_extension("otf") == "font/otf"
    assert font_mime_from_extension("ttf") == "font/ttf"
    assert font_mime_from_extension("woff") == "font/ttf"


def test_detect_image_mime():
    """확장자 우선, 알 수 없으면 내용 확인"""
    gif = _image_bytes("GIF")
    assert detect_image_mime(gif, "gif") == "image/gif"
    assert detect_image_mime(gif, "") == "image/gif"
    assert detect_image_mime(gif, "bin") == "image/gif"
    assert detect_image_mime(b"not an image", "") == "image/png"

    print("✅ Image type detection test passed!")


def test_cover_and_header_loaders():
    """표지 → cover.<ext>, 챕터 머리 → chapter-header.<ext>"""
    with tempfile.TemporaryDirectory() as tmp:
        cover_file = Path(tmp) / "Front.JPG"
        cover_file.write_bytes(b"\xff\xd8\xff\xe0jpeg")
        cover = cover_asset_from_path(cover_file)
        assert cover.name == "cover.jpg"
        assert cover.mime == "image/jpeg"

        header_file = Path(tmp) / "head.webp"
        header_file.write_bytes(b"RIFFwebp")
        header = chapter_header_asset_from_path(header_file)
        assert header.name == "chapter-header.webp"
        assert header.mime == "image/webp"

        empty = Path(tmp) / "empty.png"
        empty.write_bytes(b"")
        assert cover_asset_from_path(empty) is None

        try:
            cover_asset_from_path(Path(tmp) / "missing.png")
            assert False, "Expected BuildIOError"
        except BuildIOError:
            pass


def test_gallery_loaders():
    """삽화 이름 / 캡션"""
    unnamed = image_asset_from_bytes(b"data", 2)
    assert unnamed.name == "image_0003.png"
    assert unnamed.mime == "image/png"
    assert image_asset_from_bytes(b"", 0) is None

    named = image_asset_from_bytes(_image_bytes("GIF"), 0, "my map.gif", caption="")
    assert named.name == "my_map.gif"
    assert named.mime == "image/gif"
    assert named.caption is None

    with tempfile.TemporaryDirectory() as tmp:
        first = Path(tmp) / "a.png"
        first.write_bytes(_image_bytes("PNG"))
        skipped = Path(tmp) / "b.png"
        skipped.write_bytes(b"")
        third = Path(tmp) / "c.jpg"
        third.write_bytes(b"jpeg")

        images = load_image_assets([first, skipped, third], captions=["Map"])
        assert [img.name for img in images] == ["a.png", "c.jpg"]
        assert images[0].caption == "Map"
        assert images[1].caption is None
        assert images[1].mime == "image/jpeg"

    print("✅ Gallery loader tests passed!")


def test_duplicate_gallery_names():
    """다른 폴더의 같은 파일명 → a.png, a_2.png"""
    with tempfile.TemporaryDirectory() as tmp:
        paths = []
        for folder in ("one", "two", "three"):
            path = Path(tmp) / folder / "a.png"
            path.parent.mkdir()
            path.write_bytes(_image_bytes("PNG"))
            paths.append(path)

        images = load_image_assets(paths)
        assert [img.name for img in images] == ["a.png", "a_2.png", "a_3.png"]

    # 예약된 이름 (표지 등) 과도 겹치지 않게
    images = [ImageAsset("cover.png", b"x", "image/png"), ImageAsset("cover_2.png", b"y", "image/png")]
    renamed = dedupe_image_names(images, reserved=["cover.png"])
    assert [img.name for img in renamed] == ["cover_2.png", "cover_2_2.png"]
    assert images[0].name == "cover.png"


def test_font_loader():
    with tempfile.TemporaryDirectory() as tmp:
        font_file = Path(tmp) / "Song Ti.otf"
        font_file.write_bytes(b"OTTO")
        font = load_font_asset(font_file)

        assert font.name == "Song_Ti.otf"
        assert font.family == "Song Ti"
        assert font.mime == "font/otf"
        assert font.data == b"OTTO"


def test_template_asset_providers():
    """메모리 / 디렉토리 제공자"""
    assets = InMemoryTemplateAssets({"images/头图.webp": b"img", "fonts/kt.ttf": b"font"})
    assert assets.fantasy_image("头图.webp") == b"img"
    assert assets.fantasy_font("kt.ttf") == b"font"
    try:
        assets.fantasy_image("纹理.webp")
        assert False, "Expected BuildIOError"
    except BuildIOError as e:
        assert "images/纹理.webp" in str(e)

    with tempfile.TemporaryDirectory() as tmp:
        image_dir = Path(tmp) / "fantasy" / "images"
        image_dir.mkdir(parents=True)
        (image_dir / "ttl.webp").write_bytes(b"ttl")

        provider = DirectoryTemplateAssets(tmp)
        assert provider.fantasy_image("ttl.webp") == b"ttl"
        try:
            provider.fantasy_font("kt.ttf")
            assert False, "Expected BuildIOError"
        except BuildIOError:
            pass


def main():
    """테스트 실행"""
    print("=" * 50)
    print("Asset Loader Tests")
    print("=" * 50)

    test_mime_maps()
    test_detect_image_mime()
    test_cover_and_header_loaders()
    test_gallery_loaders()
    test_duplicate_gallery_names()
    test_font_loader()
    test_template_asset_providers()

    print("✅ All tests passed!")


if __name__ == "__main__":
    main()
