"""pygame renderer: composed photo canvas, bottom button bar, action sheets, prompt."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Dict, Optional, Tuple

import pygame

from core.app_controller import AppState, Menu, menu_items, visible_buttons
from core.photo_editor import PhotoEditor

# UI_TOKENS: palette and typography
C_BG = (10, 10, 12)
C_PANEL = (20, 20, 24, 234)
C_PANEL_SOFT = (26, 26, 30, 220)
C_TEXT = (236, 236, 238)
C_TEXT_SUB = (144, 144, 150)
C_ACCENT = (255, 204, 0)
C_PRESS = (40, 40, 46, 240)
C_SCRIM = (0, 0, 0, 150)

# UI_LAYOUT: spacing scale and component geometry
SP8, SP12, SP16, SP24 = 8, 12, 16, 24
TOP_H = 56
BOTTOM_H = 96
RADIUS = 12
HIT_MIN = 48
SHEET_ROW_H = 52

TYPE_H1 = 20
TYPE_BODY = 15


def canvas_rect(width: int, height: int) -> Tuple[int, int, int, int]:
    """Screen area of the photo canvas (x, y, w, h)."""
    return 0, TOP_H, width, height - TOP_H - BOTTOM_H


class UIRenderer:
    def __init__(self, screen: pygame.Surface, width: int, height: int, font_path: Optional[str] = None):
        self.screen = screen
        self.w = width
        self.h = height
        self.canvas = canvas_rect(width, height)
        self.ui_surface = pygame.Surface((self.w, self.h), pygame.SRCALPHA)
        self.hitboxes: Dict[str, Tuple[int, int, int, int]] = {}
        self.font_regular, self.font_heading = self._load_fonts(font_path)
        self._photo_cache: Optional[pygame.Surface] = None
        self.last_frame_stats = {"frame_ms": 0.0, "dirty": 0}

    def _load_fonts(self, font_path: Optional[str]):
        if font_path and Path(font_path).exists():
            try:
                return pygame.font.Font(font_path, TYPE_BODY), pygame.font.Font(font_path, TYPE_H1)
            except (pygame.error, OSError):
                pass
        return pygame.font.SysFont("arial", TYPE_BODY), pygame.font.SysFont("arial", TYPE_H1, bold=True)

    def _txt(self, font, text: str, color, xy: Tuple[int, int], center: bool = False):
        surf = font.render(text, True, color)
        if center:
            xy = (xy[0] - surf.get_width() // 2, xy[1] - surf.get_height() // 2)
        self.ui_surface.blit(surf, xy)

    def _draw_btn(self, rect: Tuple[int, int, int, int], pressed: bool = False):
        col = C_PRESS if pressed else C_PANEL_SOFT
        pygame.draw.rect(self.ui_surface, col, rect, border_radius=RADIUS)

    def _sheet_rect(self, rows: int) -> Tuple[int, int, int, int]:
        h = SP16 * 2 + TYPE_H1 + SP12 + rows * (SHEET_ROW_H + SP8)
        return SP12, self.h - h - SP12, self.w - 2 * SP12, h

    def _prompt_rect(self) -> Tuple[int, int, int, int]:
        w, h = self.w - 2 * SP24, 200
        return SP24, (self.h - h) // 2, w, h

    def _button_rects(self, has_photo: bool) -> Dict[str, Tuple[int, int, int, int]]:
        keys = visible_buttons(has_photo)
        bw = (self.w - SP16 * (len(keys) + 1)) // len(keys)
        y = self.h - BOTTOM_H + (BOTTOM_H - HIT_MIN) // 2
        return {key: (SP16 + i * (bw + SP16), y, bw, HIT_MIN) for i, key in enumerate(keys)}

    def build_hitboxes(self, state: AppState, has_photo: bool) -> Dict[str, Tuple[int, int, int, int]]:
        boxes: Dict[str, Tuple[int, int, int, int]] = {}
        if state.menu is None and not state.prompt_open:
            boxes.update(self._button_rects(has_photo))

        if state.menu is not None:
            items = menu_items(state.menu)
            sx, sy, sw, _ = self._sheet_rect(len(items))
            row_y = sy + SP16 + TYPE_H1 + SP12
            for key, _ in items:
                boxes[key] = (sx + SP12, row_y, sw - 2 * SP12, SHEET_ROW_H)
                row_y += SHEET_ROW_H + SP8

        if state.prompt_open:
            px, py, pw, ph = self._prompt_rect()
            half = (pw - 3 * SP16) // 2
            boxes["prompt:cancel"] = (px + SP16, py + ph - HIT_MIN - SP16, half, HIT_MIN)
            boxes["prompt:add"] = (px + 2 * SP16 + half, py + ph - HIT_MIN - SP16, half, HIT_MIN)
        return boxes

    def invalidate_photo(self):
        self._photo_cache = None

    def _photo_surface(self, editor: PhotoEditor) -> Optional[pygame.Surface]:
        if self._photo_cache is None:
            img = editor.render()
            if img is None:
                return None
            surf = pygame.image.frombytes(img.tobytes(), img.size, "RGB")
            if surf.get_size() != self.canvas[2:]:
                surf = pygame.transform.smoothscale(surf, self.canvas[2:])
            self._photo_cache = surf
        return self._photo_cache

    def _draw_drag_outline(self, state: AppState, editor: PhotoEditor):
        if state.drag_id is None:
            return
        overlay = editor.overlays.get(state.drag_id)
        if overlay is None:
            return
        left, top, right, bottom = overlay.bounds
        cx, cy = self.canvas[:2]
        rect = (int(left) + cx, int(top) + cy, int(right - left), int(bottom - top))
        pygame.draw.rect(self.ui_surface, C_ACCENT, rect, 1)

    def _draw_menu(self, state: AppState):
        items = menu_items(state.menu)
        pygame.draw.rect(self.ui_surface, C_SCRIM, (0, 0, self.w, self.h))
        sx, sy, sw, sh = self._sheet_rect(len(items))
        pygame.draw.rect(self.ui_surface, C_PANEL, (sx, sy, sw, sh), border_radius=RADIUS)
        title = state.t("edit_photo" if state.menu == Menu.EDIT else "select_filter")
        self._txt(self.font_heading, title, C_TEXT_SUB, (sx + sw // 2, sy + SP16 + TYPE_H1 // 2), center=True)
        for key, label in items:
            rect = self.hitboxes[key]
            self._draw_btn(rect, state.touch_target == key)
            color = C_ACCENT if key == "menu:cancel" else C_TEXT
            self._txt(self.font_regular, state.t(label), color,
                      (rect[0] + rect[2] // 2, rect[1] + rect[3] // 2), center=True)

    def _draw_prompt(self, state: AppState):
        pygame.draw.rect(self.ui_surface, C_SCRIM, (0, 0, self.w, self.h))
        px, py, pw, ph = self._prompt_rect()
        pygame.draw.rect(self.ui_surface, C_PANEL, (px, py, pw, ph), border_radius=RADIUS)
        self._txt(self.font_heading, state.t("add_text"), C_TEXT, (px + pw // 2, py + SP24), center=True)
        self._txt(self.font_regular, state.t("add_text_prompt"), C_TEXT_SUB, (px + pw // 2, py + SP24 * 2), center=True)
        field_rect = (px + SP16, py + SP24 * 3, pw - 2 * SP16, 40)
        pygame.draw.rect(self.ui_surface, C_PANEL_SOFT, field_rect, border_radius=8)
        caret = "|" if int(time.perf_counter() * 2) % 2 == 0 else " "
        self._txt(self.font_regular, state.prompt_text + caret, C_TEXT, (field_rect[0] + SP8, field_rect[1] + 10))
        for key, label in (("prompt:cancel", "cancel"), ("prompt:add", "add")):
            rect = self.hitboxes[key]
            self._draw_btn(rect)
            self._txt(self.font_regular, state.t(label), C_ACCENT if key == "prompt:add" else C_TEXT,
                      (rect[0] + rect[2] // 2, rect[1] + rect[3] // 2), center=True)

    def render_ui(self, state: AppState, editor: PhotoEditor):
        self.ui_surface.fill((0, 0, 0, 0))
        self.hitboxes = self.build_hitboxes(state, editor.has_photo)
        pressed = time.perf_counter() < state.pressed_until

        pygame.draw.rect(self.ui_surface, C_PANEL, (0, 0, self.w, TOP_H))
        if state.toast:
            self._txt(self.font_regular, state.toast, C_ACCENT, (self.w // 2, TOP_H // 2), center=True)
        elif not editor.has_photo:
            self._txt(self.font_regular, state.t("no_photo"), C_TEXT_SUB, (self.w // 2, TOP_H // 2), center=True)

        self._draw_drag_outline(state, editor)

        pygame.draw.rect(self.ui_surface, C_PANEL, (0, self.h - BOTTOM_H, self.w, BOTTOM_H))
        for key, rect in self._button_rects(editor.has_photo).items():
            self._draw_btn(rect, pressed and state.touch_target == key)
            self._txt(self.font_regular, state.t(key), C_TEXT, (rect[0] + rect[2] // 2, rect[1] + rect[3] // 2), center=True)

        if state.menu is not None:
            self._draw_menu(state)
        if state.prompt_open:
            self._draw_prompt(state)

    def compose(self, state: AppState, editor: PhotoEditor) -> Dict[str, Tuple[int, int, int, int]]:
        start = time.perf_counter()
        dirty = len(state.dirty_rects)
        if dirty:
            self.invalidate_photo()
        self.screen.fill(C_BG)
        photo = self._photo_surface(editor)
        if photo is not None:
            self.screen.blit(photo, self.canvas[:2])
        self.render_ui(state, editor)
        self.screen.blit(self.ui_surface, (0, 0))
        self.last_frame_stats = {
            "frame_ms": (time.perf_counter() - start) * 1000.0,
            "dirty": dirty,
        }
        return self.hitboxes
