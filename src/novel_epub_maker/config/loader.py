"""설정 파일 로더 (YAML)

config.yml 을 읽어서 Python 객체로 변환
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field, asdict
from novel_epub_maker.stages.models import CssTemplate, TextStyle, DEFAULT_BASE_CSS_PATH, DEFAULT_FILENAME_TEMPLATE
from novel_epub_maker.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = "config/config.yml"


@dataclass
class PathsConfig:
    """경로 설정"""
    output_folder: str = "."
    base_css: str = DEFAULT_BASE_CSS_PATH
    assets_dir: str = "assets"
    logs: str = "data/logs"


@dataclass
class EPUBConfig:
    """EPUB 생성 옵션"""
    filename_template: str = DEFAULT_FILENAME_TEMPLATE
    language: str = "zh-CN"
    css_template: str = "Classic"
    include_images_section: bool = True
    inline_toc: bool = True
    gallery_in_toc: bool = True
    toc_title: str = ""


@dataclass
class StyleConfig:
    """본문 타이포그래피 기본값"""
    line_height: float = 1.5
    paragraph_spacing: float = 1.0
    text_indent: float = 2.0
    font_size: float = 16.0
    font_color: List[int] = field(default_factory=lambda: [0, 0, 0])
    custom_css: str = ""


@dataclass
class LoggingConfig:
    """로깅 설정"""
    file_level: str = "DEBUG"
    console_level: str = "INFO"


@dataclass
class Config:
    """전체 설정"""
    paths: PathsConfig = field(default_factory=PathsConfig)
    epub: EPUBConfig = field(default_factory=EPUBConfig)
    style: StyleConfig = field(default_factory=StyleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_text_style(self) -> TextStyle:
        """설정값으로 TextStyle 생성

        Raises:
            ValueError: 알 수 없는 css_template
        """
        r, g, b = (list(self.style.font_color) + [0, 0, 0])[:3]
        return TextStyle(
            line_height=float(self.style.line_height),
            paragraph_spacing=float(self.style.paragraph_spacing),
            text_indent=float(self.style.text_indent),
            font_size=float(self.style.font_size),
            font_color=(int(r), int(g), int(b)),
            css_template=CssTemplate.from_name(self.epub.css_template),
            custom_css=self.style.custom_css,
        )


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    return data.get(key) or {}


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """config.yml 로드 (누락된 항목은 기본값)

    Args:
        config_path: 설정 파일 경로

    Returns:
        Config 객체

    Raises:
        FileNotFoundError: 설정 파일이 없을 때
        yaml.YAMLError: YAML 파싱 에러
    """
    path = Path(config_path)
    if not path.exists():
        logger.error(f"Config file not found: {config_path}")
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading config from: {config_path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    config = Config(
        paths=PathsConfig(**_section(data, "paths")),
        epub=EPUBConfig(**_section(data, "epub")),
        style=StyleConfig(**_section(data, "style")),
        logging=LoggingConfig(**_section(data, "logging"))
    )

    logger.info(f"✅ Config loaded: template={config.epub.css_template}, output={config.paths.output_folder}")
    return config


# 전역 설정 인스턴스 (싱글톤)
_config: Optional[Config] = None


def get_config() -> Config:
    """전역 설정 인스턴스 반환 (싱글톤)

    기본 설정 파일이 없으면 내장 기본값을 쓴다.

    Example:
        >>> from novel_epub_maker.config.loader import get_config
        >>> config = get_config()
        >>> print(config.epub.filename_template)
    """
    global _config
    if _config is None:
        if Path(DEFAULT_CONFIG_PATH).exists():
            _config = load_config(DEFAULT_CONFIG_PATH)
        else:
            logger.debug(f"{DEFAULT_CONFIG_PATH} not found, using defaults")
            _config = Config()
    return _config


def save_config(config: Config, config_path: str = DEFAULT_CONFIG_PATH) -> None:
    """config.yml 저장

    Args:
        config: Config 객체
        config_path: 설정 파일 경로
    """
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(asdict(config), f, allow_unicode=True, default_flow_style=False, sort_keys=False)

    logger.info(f"✅ Config saved: {config_path}")
