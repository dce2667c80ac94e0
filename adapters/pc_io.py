"""PC input adapter: mouse-as-touch + keyboard to the shared InputEvent stream."""

from __future__ import annotations

from typing import Callable, List, Tuple

import pygame

from core.input_events import EventType, InputEvent


class PCIOAdapter:
    def __init__(self, map_pos: Callable[[Tuple[int, int]], Tuple[int, int]]):
        self.map_pos = map_pos
        self._last_touch = (0, 0)

    def translate(self, event) -> List[InputEvent]:
        if event.type == pygame.QUIT:
            return [InputEvent(EventType.SHUTDOWN)]
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            p = self.map_pos(event.pos)
            self._last_touch = p
            return [InputEvent(EventType.TOUCH_DOWN, pos=p)]
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            p = self.map_pos(event.pos)
            return [InputEvent(EventType.TOUCH_UP, pos=p)]
        if event.type == pygame.MOUSEMOTION and event.buttons[0]:
            p = self.map_pos(event.pos)
            # incremental: reference point resets after every move
            delta = (p[0] - self._last_touch[0], p[1] - self._last_touch[1])
            self._last_touch = p
            return [InputEvent(EventType.TOUCH_MOVE, pos=p, delta=delta)]
        if event.type == pygame.TEXTINPUT:
            return [InputEvent(EventType.TEXT_INPUT, text=event.text)]
        if event.type == pygame.KEYDOWN:
            keymap = {
                pygame.K_BACKSPACE: EventType.BACKSPACE,
                pygame.K_RETURN: EventType.SUBMIT,
                pygame.K_KP_ENTER: EventType.SUBMIT,
                pygame.K_ESCAPE: EventType.CANCEL,
            }
            if event.key in keymap:
                return [InputEvent(keymap[event.key])]
        return []

    def poll(self) -> List[InputEvent]:
        out: List[InputEvent] = []
        for event in pygame.event.get():
            out.extend(self.translate(event))
        return out
