"""
FramePrint — Backend Configuration
Loads .env automatically, then reads all settings from environment variables.
"""

import math
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(__file__).resolve().parent.parent.parent.parent / ".env"
load_dotenv(_env_path)


@dataclass(frozen=True)
class FrameDefaults:
    """Values used when a form field is missing, unparsable or non-positive."""
    width_in: float
    height_in: float
    dpi: int


@dataclass(frozen=True)
class PageConfig:
    """Output page geometry."""
    size: str
    margin_mm: float
    border_width_mm: float


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""
    host: str
    port: int
    debug: bool
    open_browser: bool
    max_upload_mb: float
    defaults: FrameDefaults
    page: PageConfig


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def _env_number(name: str, default: str, cast, problems: list[str]):
    """Parse a numeric variable; unparsable values are reported and replaced by the default."""
    raw = os.getenv(name, default)
    try:
        value = cast(raw)
    except ValueError:
        problems.append(f"{name} must be a number (got {raw!r})")
        return cast(default)
    if not math.isfinite(value):
        problems.append(f"{name} must be finite (got {raw!r})")
        return cast(default)
    return value


def _load_config(problems: list[str] | None = None) -> AppConfig:
    problems = problems if problems is not None else []
    return AppConfig(
        host=os.getenv("APP_HOST", "localhost"),
        port=_env_number("APP_PORT", "8080", int, problems),
        debug=_env_bool("APP_DEBUG", "false"),
        open_browser=_env_bool("APP_OPEN_BROWSER", "true"),
        max_upload_mb=_env_number("MAX_UPLOAD_MB", "20", float, problems),
        defaults=FrameDefaults(
            width_in=_env_number("DEFAULT_FRAME_WIDTH_IN", "8.0", float, problems),
            height_in=_env_number("DEFAULT_FRAME_HEIGHT_IN", "10.0", float, problems),
            dpi=_env_number("DEFAULT_DPI", "300", int, problems),
        ),
        page=PageConfig(
            size=os.getenv("PAGE_SIZE", "A4").upper(),
            margin_mm=_env_number("PAGE_MARGIN_MM", "5.0", float, problems),
            border_width_mm=_env_number("BORDER_WIDTH_MM", "0.5", float, problems),
        ),
    )


def _validate_config(cfg: AppConfig, problems: list[str] | None = None) -> None:
    """Fail fast on unparsable values or defaults that would let invalid geometry reach the core."""
    problems = list(problems or [])
    if cfg.defaults.width_in <= 0:
        problems.append("DEFAULT_FRAME_WIDTH_IN must be > 0")
    if cfg.defaults.height_in <= 0:
        problems.append("DEFAULT_FRAME_HEIGHT_IN must be > 0")
    if cfg.defaults.dpi <= 0:
        problems.append("DEFAULT_DPI must be > 0")
    if cfg.page.size not in ("A4", "LETTER"):
        problems.append("PAGE_SIZE must be A4 or LETTER")
    if cfg.page.margin_mm < 0:
        problems.append("PAGE_MARGIN_MM must be >= 0")
    if cfg.page.border_width_mm <= 0:
        problems.append("BORDER_WIDTH_MM must be > 0")
    if cfg.max_upload_mb <= 0:
        problems.append("MAX_UPLOAD_MB must be > 0")
    if problems:
        print(
            f"\n  ERROR: Invalid configuration: {'; '.join(problems)}\n"
            f"  Fix the values in .env or the environment and restart.\n",
            file=sys.stderr,
        )
        sys.exit(1)


_load_problems: list[str] = []
settings = _load_config(_load_problems)
_validate_config(settings, _load_problems)
