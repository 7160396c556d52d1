"""CLI 테스트 스크립트"""

import logging
import tempfile
import zipfile
from pathlib import Path

import yaml
from typer.testing import CliRunner

from novel_epub_maker.cli import app, detect_encoding, read_manuscript

runner = CliRunner()

MANUSCRIPT = "第一章 开始\n内容。\n\n第二章 继续\n更多内容。\n"


def _invoke(args):
    """CLI 실행 (setup_logging 이 바꾼 루트 핸들러는 원래대로 복구)"""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    try:
        return runner.invoke(app, args)
    finally:
        for handler in list(root_logger.handlers):
            if handler not in saved_handlers:
                root_logger.removeHandler(handler)
                handler.close()
        for handler in saved_handlers:
            if handler not in root_logger.handlers:
                root_logger.addHandler(handler)
        root_logger.setLevel(saved_level)


def _write_config(tmp: Path) -> Path:
    config_path = tmp / "config.yml"
    config_path.write_text(yaml.safe_dump({
        "paths": {
            "output_folder": str(tmp / "default-out"),
            "base_css": str(tmp / "missing.css"),
            "assets_dir": str(tmp / "assets"),
            "logs": str(tmp / "logs"),
        },
    }), encoding="utf-8")
    return config_path


def test_help():
    """도움말 테스트"""
    result = runner.invoke(app, ["--help"])
    print(result.stdout)
    assert result.exit_code == 0
    assert "convert" in result.stdout
    assert "preview" in result.stdout


def test_templates():
    result = runner.invoke(app, ["templates"])
    assert result.exit_code == 0
    for name in ("Classic", "Folio", "Fantasy", "Minimal"):
        assert name in result.stdout


def test_preview():
    """챕터 미리보기"""
    with tempfile.TemporaryDirectory() as tmp:
        source = Path(tmp) / "novel.txt"
        source.write_text(MANUSCRIPT, encoding="utf-8")

        result = _invoke(["preview", str(source), "--encoding", "utf-8"])
        print(result.stdout)
        assert result.exit_code == 0
        assert "signature:" in result.stdout

        result = _invoke(["preview", str(source), "--method", "bogus"])
        assert result.exit_code != 0


def test_convert():
    """TXT → EPUB 변환"""
    with tempfile.TemporaryDirectory() as tmp:
        tmp_path = Path(tmp)
        source = tmp_path / "书名_作者.txt"
        source.write_text(MANUSCRIPT, encoding="utf-8")
        output_dir = tmp_path / "out"

        result = _invoke([
            "convert", str(source),
            "--output", str(output_dir),
            "--config", str(_write_config(tmp_path)),
            "--encoding", "utf-8",
            "--template", "modern",
        ])
        print(result.stdout)
        assert result.exit_code == 0, result.stdout

        epub_path = output_dir / "书名_作者.epub"
        assert epub_path.exists()
        with zipfile.ZipFile(epub_path) as archive:
            assert "OEBPS/chapter_0002.xhtml" in archive.namelist()

        assert list((tmp_path / "logs").glob("*.log"))


def test_convert_failure_exit_code():
    """챕터가 없으면 종료 코드 1"""
    with tempfile.TemporaryDirectory() as tmp:
        tmp_path = Path(tmp)
        source = tmp_path / "plain.txt"
        source.write_text("no chapter titles here", encoding="utf-8")

        result = _invoke([
            "convert", str(source),
            "--config", str(_write_config(tmp_path)),
            "--encoding", "utf-8",
        ])
        assert result.exit_code == 1
        assert not (tmp_path / "default-out").exists()


def test_read_manuscript():
    """원고 디코딩"""
    with tempfile.TemporaryDirectory() as tmp:
        bom_file = Path(tmp) / "bom.txt"
        bom_file.write_bytes("\ufeff第一章 开始".encode("utf-8"))
        assert read_manuscript(bom_file) == "第一章 开始"

        gbk_file = Path(tmp) / "gbk.txt"
        gbk_file.write_bytes("第一章 开始".encode("gb18030"))
        assert read_manuscript(gbk_file, "gb18030") == "第一章 开始"

    assert detect_encoding(b"plain ascii text") == "ascii"


if __name__ == "__main__":
    print("Testing CLI...")
    print("\n=== Help ===")
    test_help()
    print("\n=== Templates ===")
    test_templates()
    print("\n=== Preview ===")
    test_preview()
    print("\n=== Convert ===")
    test_convert()
    test_convert_failure_exit_code()
    test_read_manuscript()
    print("\n✅ CLI tests passed!")
