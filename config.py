"""Runtime configuration: JSON defaults merged with an optional user file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

CONFIG_ENV = "SNAPCAM_CONFIG"
DEFAULTS_PATH = Path(__file__).with_name("config_defaults.json")

logger = logging.getLogger(__name__)


def _merge(base: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in patch.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            out[k] = _merge(base[k], v)
        else:
            out[k] = v
    return out


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        return json.loads(path.read_text())
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}


def load_runtime_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Defaults from ``config_defaults.json`` overlaid with the user file.

    The user file comes from ``path`` or the ``SNAPCAM_CONFIG`` environment
    variable; a missing file just yields the defaults.
    """
    cfg = _read_json(DEFAULTS_PATH)
    user_path = path or os.environ.get(CONFIG_ENV)
    if user_path:
        cfg = _merge(cfg, _read_json(Path(user_path)))
    return cfg


@dataclass
class EditorConfig:
    screen_width: int = 480
    screen_height: int = 800
    font_size: int = 30
    min_scale: float = 0.5
    text_color: Tuple[int, int, int] = (255, 255, 255)
    font_path: Optional[str] = None
    content_mode: str = "aspect_fit"
    render_scale: float = 1.0
    background: Tuple[int, int, int] = (0, 0, 0)
    photo_dir: Path = Path("./snapcam_photos")
    share_dir: Path = Path("./snapcam_shared")
    jpeg_quality: int = 95
    log_file: Optional[str] = "snapcam.log"
    log_level: str = "INFO"
    lang: str = "en"
    fps: int = 30

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "EditorConfig":
        screen = cfg.get("screen", {})
        text = cfg.get("text", {})
        render = cfg.get("render", {})
        storage = cfg.get("storage", {})
        log = cfg.get("logging", {})
        ui = cfg.get("ui", {})
        d = cls()
        return cls(
            screen_width=int(screen.get("width", d.screen_width)),
            screen_height=int(screen.get("height", d.screen_height)),
            font_size=int(text.get("font_size", d.font_size)),
            min_scale=float(text.get("min_scale", d.min_scale)),
            text_color=tuple(text.get("color", d.text_color)),
            font_path=text.get("font_path", d.font_path),
            content_mode=render.get("content_mode", d.content_mode),
            render_scale=float(render.get("scale", d.render_scale)),
            background=tuple(render.get("background", d.background)),
            photo_dir=Path(storage.get("photo_dir", d.photo_dir)),
            share_dir=Path(storage.get("share_dir", d.share_dir)),
            jpeg_quality=int(storage.get("jpeg_quality", d.jpeg_quality)),
            log_file=log.get("file", d.log_file),
            log_level=str(log.get("level", d.log_level)).upper(),
            lang=ui.get("lang", d.lang),
            fps=int(ui.get("fps", d.fps)),
        )


def load_editor_config(path: Optional[str] = None) -> EditorConfig:
    return EditorConfig.from_dict(load_runtime_config(path))
