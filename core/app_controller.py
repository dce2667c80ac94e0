"""App controller: turns input events into editing-session actions."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from core.geometry import Point, Vector
from core.i18n import I18N
from core.input_events import EventType, InputEvent
from core.photo_editor import PhotoEditor, Presenter

TOAST_SECONDS = 2.5

FILTER_ITEMS = [("filter_none", "none"), ("filter_sepia", "sepia"), ("filter_mono", "mono")]


class Menu(Enum):
    EDIT = auto()
    FILTER = auto()


def visible_buttons(has_photo: bool) -> List[str]:
    if not has_photo:
        return ["take_photo"]
    return ["take_photo", "edit", "save", "share", "close"]


def menu_items(menu: Menu) -> List[Tuple[str, str]]:
    """(hitbox key, i18n label key) pairs of an open action sheet."""
    if menu == Menu.EDIT:
        items = [("menu:apply_filter", "apply_filter"), ("menu:add_text", "add_text")]
    else:
        items = [(f"menu:filter:{fid}", label) for label, fid in FILTER_ITEMS]
    return items + [("menu:cancel", "cancel")]


@dataclass
class AppState:
    lang: str = "en"
    menu: Optional[Menu] = None
    prompt_text: Optional[str] = None
    drag_id: Optional[int] = None
    shutdown_requested: bool = False
    touch_target: Optional[str] = None
    pressed_until: float = 0.0
    toast: str = ""
    toast_left: float = 0.0
    dirty_rects: List[Tuple[int, int, int, int]] = field(default_factory=list)

    def t(self, key: str) -> str:
        return I18N[self.lang].get(key, key)

    @property
    def prompt_open(self) -> bool:
        return self.prompt_text is not None


class ToastPresenter(Presenter):
    """Shows alerts and share hand-offs as a transient toast line."""

    def __init__(self, state: AppState):
        self.state = state

    def _toast(self, text: str):
        self.state.toast = text
        self.state.toast_left = TOAST_SECONDS

    def show_alert(self, title: str, message: str):
        self._toast(f"{title}: {message}")

    def present_share(self, path: Path):
        self._toast(f"{self.state.t('shared')}: {path.name}")


class AppController:
    def __init__(self, editor: PhotoEditor, width: int, height: int,
                 canvas_origin: Tuple[int, int] = (0, 0),
                 state: Optional[AppState] = None):
        self.editor = editor
        self.width = width
        self.height = height
        self.canvas_origin = canvas_origin
        self.state = state or AppState()
        self.hitboxes: Dict[str, Tuple[int, int, int, int]] = {}

    def set_hitboxes(self, boxes: Dict[str, Tuple[int, int, int, int]]):
        self.hitboxes = boxes

    def mark_dirty(self, rect: Tuple[int, int, int, int]):
        self.state.dirty_rects.append(rect)

    def mark_all_dirty(self):
        self.mark_dirty((0, 0, self.width, self.height))

    def pop_dirty(self) -> List[Tuple[int, int, int, int]]:
        rects = self.state.dirty_rects[:]
        self.state.dirty_rects.clear()
        return rects

    def to_canvas(self, p: Tuple[int, int]) -> Point:
        return Point(p[0] - self.canvas_origin[0], p[1] - self.canvas_origin[1])

    def _hit(self, p: Tuple[int, int]) -> Optional[str]:
        x, y = p
        for key, (rx, ry, rw, rh) in self.hitboxes.items():
            if rx <= x <= rx + rw and ry <= y <= ry + rh:
                return key
        return None

    def _submit_prompt(self):
        s = self.state
        text = s.prompt_text or ""
        s.prompt_text = None
        if text.strip():
            self.editor.add_text(text)

    async def _on_press(self, key: Optional[str]):
        s = self.state
        if key is None:
            return
        s.pressed_until = time.perf_counter() + 0.11

        if key == "take_photo":
            s.menu = None
            await self.editor.take_photo()
        elif key == "close":
            self.editor.close()
        elif key == "edit":
            s.menu = Menu.EDIT
        elif key == "save":
            await self.editor.save_photo()
        elif key == "share":
            self.editor.share_photo()
        elif key == "menu:apply_filter":
            s.menu = Menu.FILTER if self.editor.original_image is not None else None
        elif key == "menu:add_text":
            s.menu = None
            s.prompt_text = ""
        elif key.startswith("menu:filter:"):
            s.menu = None
            self.editor.apply_filter(key.split(":", 2)[2])
        elif key == "menu:cancel":
            s.menu = None
        elif key == "prompt:add":
            self._submit_prompt()
        elif key == "prompt:cancel":
            s.prompt_text = None
        self.mark_all_dirty()

    def tick(self, dt: float):
        """Advance timers by ``dt`` seconds."""
        s = self.state
        if not s.toast:
            return
        s.toast_left -= dt
        if s.toast_left <= 0:
            s.toast = ""
            self.mark_all_dirty()

    async def _handle_prompt(self, event: InputEvent):
        s = self.state
        if event.type == EventType.TEXT_INPUT:
            s.prompt_text += event.text
        elif event.type == EventType.BACKSPACE:
            s.prompt_text = s.prompt_text[:-1]
        elif event.type == EventType.SUBMIT:
            self._submit_prompt()
        elif event.type == EventType.CANCEL:
            s.prompt_text = None
        elif event.type == EventType.TOUCH_DOWN:
            key = self._hit(event.pos)
            if key in ("prompt:add", "prompt:cancel"):
                await self._on_press(key)
        self.mark_all_dirty()

    async def handle(self, event: InputEvent):
        s = self.state

        if event.type == EventType.SHUTDOWN:
            s.shutdown_requested = True
        elif s.prompt_open:
            await self._handle_prompt(event)
        elif event.type == EventType.CANCEL:
            s.menu = None
            self.mark_all_dirty()
        elif event.type == EventType.TOUCH_DOWN:
            s.touch_target = self._hit(event.pos)
            if s.menu is not None:
                # tapping outside an action sheet dismisses it
                if s.touch_target is None or not s.touch_target.startswith("menu:"):
                    s.touch_target = "menu:cancel"
                await self._on_press(s.touch_target)
            elif s.touch_target is not None:
                await self._on_press(s.touch_target)
            else:
                hit = self.editor.overlays.overlay_at(self.to_canvas(event.pos))
                s.drag_id = hit.id if hit is not None else None
        elif event.type == EventType.TOUCH_MOVE:
            if s.drag_id is not None:
                self.editor.move_text(s.drag_id, Vector(*event.delta))
                self.mark_all_dirty()
        elif event.type == EventType.TOUCH_UP:
            s.touch_target = None
            s.drag_id = None
