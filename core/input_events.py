"""Input event model produced by the pygame adapter and consumed by the controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple


class EventType(Enum):
    TOUCH_DOWN = auto()
    TOUCH_MOVE = auto()
    TOUCH_UP = auto()
    TEXT_INPUT = auto()
    BACKSPACE = auto()
    SUBMIT = auto()
    CANCEL = auto()
    SHUTDOWN = auto()


@dataclass(frozen=True)
class InputEvent:
    type: EventType
    pos: Tuple[int, int] = (0, 0)
    # TOUCH_MOVE: motion since the previous event of the same drag
    delta: Tuple[int, int] = (0, 0)
    text: str = ""
