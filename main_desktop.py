#!/usr/bin/env python3
"""
SnapCam - desktop editor
========================

Take a photo (webcam, or an image file / folder with --image), apply a
filter or drag text onto it, then save or share the flattened result.

Controls:
  Mouse       Touch (buttons, menus, drag text overlays)
  Keyboard    Type into the Add Text prompt, ENTER to add
  ESC         Close menu / prompt
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import pygame

from adapters.pc_io import PCIOAdapter
from camera_service import FileSource, ImageSource, WebcamSource
from config import EditorConfig, load_editor_config
from core.app_controller import AppController, AppState, ToastPresenter
from core.compositor import Compositor
from core.geometry import Size
from core.overlays import OverlayManager, OverlayStyle
from core.photo_editor import PhotoEditor
from core.text_layout import TextMeasurer
from core.ui_renderer import UIRenderer, canvas_rect
from filters import FilterManager
from photo_library import PhotoLibrary, ShareSheet

logger = logging.getLogger("snapcam")


def setup_logging(cfg: EditorConfig):
    handlers = [logging.StreamHandler()]
    if cfg.log_file:
        handlers.append(logging.FileHandler(cfg.log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def make_source(image: Optional[str]) -> ImageSource:
    if image:
        return FileSource(Path(image))
    return WebcamSource()


def build_editor(cfg: EditorConfig, presenter: ToastPresenter, source: ImageSource) -> PhotoEditor:
    _, _, cw, ch = canvas_rect(cfg.screen_width, cfg.screen_height)
    measurer = TextMeasurer(cfg.font_size, cfg.min_scale, cfg.font_path)
    return PhotoEditor(
        canvas=Size(cw, ch),
        presenter=presenter,
        source=source,
        library=PhotoLibrary(cfg.photo_dir, cfg.jpeg_quality),
        share_sheet=ShareSheet(cfg.share_dir),
        filters=FilterManager(),
        overlays=OverlayManager(measurer, OverlayStyle(color=cfg.text_color)),
        compositor=Compositor(measurer, cfg.content_mode, cfg.background),
        render_scale=cfg.render_scale,
    )


async def run(cfg: EditorConfig, source: ImageSource) -> int:
    pygame.init()
    screen = pygame.display.set_mode((cfg.screen_width, cfg.screen_height))
    pygame.display.set_caption("SnapCam")
    pygame.key.start_text_input()
    clock = pygame.time.Clock()

    state = AppState(lang=cfg.lang)
    editor = build_editor(cfg, ToastPresenter(state), source)
    cx, cy, _, _ = canvas_rect(cfg.screen_width, cfg.screen_height)
    controller = AppController(editor, cfg.screen_width, cfg.screen_height, (cx, cy), state)
    renderer = UIRenderer(screen, cfg.screen_width, cfg.screen_height, cfg.font_path)
    adapter = PCIOAdapter(lambda p: p)
    frame_budget_ms = 1000.0 / cfg.fps

    logger.info("SnapCam started (%dx%d, source=%s)", cfg.screen_width, cfg.screen_height, source.name)
    controller.mark_all_dirty()
    try:
        while not state.shutdown_requested:
            for event in adapter.poll():
                await controller.handle(event)
            controller.tick(clock.get_time() / 1000.0)
            controller.set_hitboxes(renderer.compose(state, editor))
            if renderer.last_frame_stats["frame_ms"] > frame_budget_ms:
                logger.debug("slow frame: %.1f ms (%d dirty)", renderer.last_frame_stats["frame_ms"],
                             renderer.last_frame_stats["dirty"])
            controller.pop_dirty()
            pygame.display.flip()
            clock.tick(cfg.fps)
            await asyncio.sleep(0)
    finally:
        pygame.quit()
    logger.info("SnapCam stopped")
    return 0


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SnapCam desktop photo editor")
    parser.add_argument("--config", help="JSON file overriding config_defaults.json")
    parser.add_argument("--image", help="image file or folder to use instead of the webcam")
    parser.add_argument("--lang", choices=["en", "de"], help="UI language")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    cfg = load_editor_config(args.config)
    if args.lang:
        cfg.lang = args.lang
    setup_logging(cfg)
    return asyncio.run(run(cfg, make_source(args.image)))


if __name__ == "__main__":
    sys.exit(main())
