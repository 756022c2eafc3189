"""Bordered windows drawn on the console's tile maps.

A window is a rectangle of tiles framed by border tiles. The frame sits
just outside the rectangle. A window as wide or as tall as the visible
screen leaves out the borders along that dimension. Coordinates wrap
around the edges of the tile map.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from .console import (
    HSWAP_TILE,
    PALETTE,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    VSWAP_TILE,
    X_SIZE,
    Y_SIZE,
    TextConsole,
)

TOTAL_X_SIZE = SCREEN_WIDTH >> 3
TOTAL_Y_SIZE = SCREEN_HEIGHT >> 3

HORIZONTAL_WINDOW_TILE = 2
VERTICAL_WINDOW_TILE = 3
ANGLE_WINDOW_TILE = 4

_NICKNAME_GEN3_MAX_SIZE = 10
_EVOLUTION_Y_SIZE_INCREMENT = 2

_BLANK = PALETTE << 12

Layout = tuple[int, int, int, int, int]


class Window(Enum):
    """The windows the interface draws."""

    TRADE_OPTIONS = "trade_options"
    TRADE_ANIMATION_SEND = "trade_animation_send"
    TRADE_ANIMATION_RECV = "trade_animation_recv"
    LEARN_MOVE_MESSAGE = "learn_move_message"
    EVOLUTION_ANIMATION = "evolution_animation"
    WAITING = "waiting"
    COLOURS = "colours"
    EVOLUTION = "evolution"
    CRASH = "crash"
    SAVING = "saving"
    LOADING = "loading"
    MESSAGE = "message"
    REJECTED = "rejected"
    OFFER = "offer"
    OFFER_OPTIONS = "offer_options"


def _bottom(screen: int, base_y_size: int, jp: int) -> Layout:
    y_size = base_y_size + jp
    return (1, TOTAL_Y_SIZE - 1 - y_size, TOTAL_X_SIZE - 2, y_size, screen)


def _centered(x_size: int, y_size: int, screen: int) -> Layout:
    x = (TOTAL_X_SIZE >> 1) - ((x_size + 1) >> 1)
    y = (TOTAL_Y_SIZE >> 1) - ((y_size + 1) >> 1)
    return (x, y, x_size, y_size, screen)


def _waiting(jp: int, extra: int) -> Layout:
    x, y, x_size, y_size, screen = _centered(10, 1, 3)
    return (x, y + extra, x_size, y_size, screen)


def _evolution(jp: int, extra: int) -> Layout:
    x_size = _NICKNAME_GEN3_MAX_SIZE + 2
    grow = _EVOLUTION_Y_SIZE_INCREMENT * extra
    return (TOTAL_X_SIZE - 1 - x_size, TOTAL_Y_SIZE - 3 - grow, x_size, 1 + grow, 3)


_LAYOUTS: dict[Window, Callable[[int, int], Layout]] = {
    Window.TRADE_OPTIONS: lambda jp, extra: (0, TOTAL_Y_SIZE - 1, TOTAL_X_SIZE, 1, 1),
    Window.TRADE_ANIMATION_SEND: lambda jp, extra: _bottom(1, 3, jp),
    Window.TRADE_ANIMATION_RECV: lambda jp, extra: _bottom(2, 3, jp),
    Window.LEARN_MOVE_MESSAGE: lambda jp, extra: _bottom(1, 6, jp),
    Window.EVOLUTION_ANIMATION: lambda jp, extra: _bottom(3, 3, jp),
    Window.WAITING: _waiting,
    Window.COLOURS: lambda jp, extra: (1, TOTAL_Y_SIZE - 2 - 3, TOTAL_X_SIZE - 2, 3, 0),
    Window.EVOLUTION: _evolution,
    Window.CRASH: lambda jp, extra: _centered(21, 5, 3),
    Window.SAVING: lambda jp, extra: _centered(9, 1, 3),
    Window.LOADING: lambda jp, extra: _centered(10, 1, 3),
    Window.MESSAGE: lambda jp, extra: (1, 0x10, TOTAL_X_SIZE - 2, TOTAL_Y_SIZE - 0x10 - 1, 2),
    Window.REJECTED: lambda jp, extra: (1, TOTAL_Y_SIZE - 4, TOTAL_X_SIZE - 2, 3, 3),
    Window.OFFER: lambda jp, extra: (
        TOTAL_X_SIZE >> 1,
        0,
        TOTAL_X_SIZE - (TOTAL_X_SIZE >> 1),
        TOTAL_Y_SIZE,
        1,
    ),
    Window.OFFER_OPTIONS: lambda jp, extra: (1, 0xD, TOTAL_X_SIZE - 2, TOTAL_Y_SIZE - 0xD - 1, 2),
}


def window_layout(window: Window, japanese: bool = False, extra: int = 0) -> Layout:
    """Return ``(x, y, x_size, y_size, screen)`` for a window.

    Japanese text needs one more row in the windows at the bottom of the
    screen. ``extra`` moves the waiting window down by that many rows and
    is the number of entries of the evolution window; other windows
    ignore it.
    """
    return _LAYOUTS[window](1 if japanese else 0, extra)


def _normalize(x: int, y: int, x_size: int, y_size: int) -> tuple[int, int, int, int]:
    x, y, x_size, y_size = (value & 0xFF for value in (x, y, x_size, y_size))
    if x >= X_SIZE or y >= Y_SIZE:
        raise ValueError(f"window origin ({x}, {y}) lies outside the tile map")
    return x, y, x_size, y_size


def create_window(
    console: TextConsole, x: int, y: int, x_size: int, y_size: int, screen_num: int
) -> None:
    """Draw the border of a window on a layer's tile map."""
    x, y, x_size, y_size = _normalize(x, y, x_size, y_size)
    console.swap_buffer_screen(console.screen_num, False)
    screen = console.get_screen(screen_num)
    fill_x = x_size == TOTAL_X_SIZE
    fill_y = y_size == TOTAL_Y_SIZE

    if 2 + x + x_size > X_SIZE:
        x_size = X_SIZE - (x + 1)
    if 2 + y + y_size > Y_SIZE:
        y_size = Y_SIZE - (y + 1)
    if not x_size or not y_size:
        return

    start_x = x - 1 if x else X_SIZE - 1
    start_y = y - 1 if y else Y_SIZE - 1
    end_x = (x + x_size) % X_SIZE
    end_y = (y + y_size) % Y_SIZE

    top = _BLANK | HORIZONTAL_WINDOW_TILE
    bottom = top | VSWAP_TILE
    left = _BLANK | VERTICAL_WINDOW_TILE
    right = left | HSWAP_TILE
    angle = _BLANK | ANGLE_WINDOW_TILE

    if not fill_y:
        span = x_size + 1 if fill_x else x_size
        for i in range(span):
            screen[x + start_y * X_SIZE + i] = top
            screen[x + end_y * X_SIZE + i] = bottom

    if not fill_x:
        span = y_size + 1 if fill_y else y_size
        for i in range(span):
            screen[start_x + (y + i) * X_SIZE] = left
            screen[end_x + (y + i) * X_SIZE] = right

    if not fill_x and not fill_y:
        screen[start_x + start_y * X_SIZE] = angle
        screen[end_x + start_y * X_SIZE] = angle | HSWAP_TILE
        screen[start_x + end_y * X_SIZE] = angle | VSWAP_TILE
        screen[end_x + end_y * X_SIZE] = angle | HSWAP_TILE | VSWAP_TILE


def reset_window(
    console: TextConsole, x: int, y: int, x_size: int, y_size: int, screen_num: int
) -> None:
    """Blank the inside of a window, wrapping around the tile map."""
    x, y, x_size, y_size = _normalize(x, y, x_size, y_size)
    console.swap_buffer_screen(console.screen_num, False)
    screen = console.get_screen(screen_num)
    for i in range(y_size):
        row = ((y + i) % Y_SIZE) * X_SIZE
        for j in range(x_size):
            screen[(x + j) % X_SIZE + row] = _BLANK


def open_window(
    console: TextConsole, window: Window, japanese: bool = False, extra: int = 0
) -> None:
    """Draw the border of one of the named windows."""
    create_window(console, *window_layout(window, japanese, extra))


def clear_window(
    console: TextConsole, window: Window, japanese: bool = False, extra: int = 0
) -> None:
    """Blank the inside of one of the named windows."""
    reset_window(console, *window_layout(window, japanese, extra))