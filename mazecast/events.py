"""Turning raw joystick, mouse and keyboard state into movement events."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

FORWARD_KEY = 72
BACK_KEY = 80
LEFT_KEY = 75
RIGHT_KEY = 77
QUIT_KEY = 1

LEFT_MOUSE_BUTTON = 1
RIGHT_MOUSE_BUTTON = 2

JOYSTICK_DEAD_ZONE = 100
MOUSE_VERTICAL_THRESHOLD = 5
MOUSE_HORIZONTAL_THRESHOLD = 20


class EventSource(enum.IntFlag):
    """Devices whose input may be requested."""

    MOUSE = 1
    JOYSTICK = 2
    KEYBOARD = 4


@dataclass
class Events:
    """Movement requests gathered from the input devices."""

    go_forward: bool = False
    go_back: bool = False
    go_left: bool = False
    go_right: bool = False
    abort: bool = False


@dataclass
class Calibration:
    """Joystick readings at the centre and at the two extreme corners."""

    xmin: int = 0
    ymin: int = 0
    xmax: int = 0
    ymax: int = 0
    xcent: int = 0
    ycent: int = 0

    def set_center(self, x: int, y: int) -> None:
        self.xcent, self.ycent = x, y

    def set_min(self, x: int, y: int) -> None:
        self.xmin, self.ymin = x, y

    def set_max(self, x: int, y: int) -> None:
        self.xmax, self.ymax = x, y


@dataclass(frozen=True)
class InputState:
    """One snapshot of the input devices.

    `keys` holds the scan codes of the keys currently held down; the mouse
    values are the movement since the previous snapshot.
    """

    joystick_x: int = 0
    joystick_y: int = 0
    joystick_button: bool = False
    mouse_dx: int = 0
    mouse_dy: int = 0
    mouse_buttons: int = 0
    keys: frozenset = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", frozenset(self.keys))


def get_events(mask, state: InputState, calibration: Calibration | None = None) -> Events:
    """Collect events from the devices selected by `mask`."""
    mask = EventSource(mask)
    calibration = calibration or Calibration()
    events = Events()

    if mask & EventSource.JOYSTICK:
        if state.joystick_y < calibration.ycent - JOYSTICK_DEAD_ZONE:
            events.go_forward = True
        if state.joystick_y > calibration.ycent + JOYSTICK_DEAD_ZONE:
            events.go_back = True
        if state.joystick_x < calibration.xcent - JOYSTICK_DEAD_ZONE:
            events.go_left = True
        if state.joystick_x > calibration.xcent + JOYSTICK_DEAD_ZONE:
            events.go_right = True
        if state.joystick_button:
            events.abort = True

    if mask & EventSource.MOUSE:
        if state.mouse_dy < -MOUSE_VERTICAL_THRESHOLD:
            events.go_forward = True
        if state.mouse_dy > MOUSE_VERTICAL_THRESHOLD:
            events.go_back = True
        if state.mouse_dx < -MOUSE_HORIZONTAL_THRESHOLD:
            events.go_left = True
        if state.mouse_dx > MOUSE_HORIZONTAL_THRESHOLD:
            events.go_right = True
        if state.mouse_buttons & LEFT_MOUSE_BUTTON:
            events.abort = True

    if mask & EventSource.KEYBOARD:
        keys = state.keys
        if FORWARD_KEY in keys:
            events.go_forward = True
        if BACK_KEY in keys:
            events.go_back = True
        if LEFT_KEY in keys:
            events.go_left = True
        if RIGHT_KEY in keys:
            events.go_right = True
        if QUIT_KEY in keys:
            events.abort = True

    return events