import pytest

from tradelink.console import HSWAP_TILE, PALETTE, VSWAP_TILE, X_SIZE, TextConsole
from tradelink.windows import (
    ANGLE_WINDOW_TILE,
    HORIZONTAL_WINDOW_TILE,
    TOTAL_X_SIZE,
    TOTAL_Y_SIZE,
    VERTICAL_WINDOW_TILE,
    Window,
    clear_window,
    create_window,
    open_window,
    reset_window,
    window_layout,
)

BLANK = PALETTE << 12
TOP = BLANK | HORIZONTAL_WINDOW_TILE
BOTTOM = TOP | VSWAP_TILE
LEFT = BLANK | VERTICAL_WINDOW_TILE
RIGHT = LEFT | HSWAP_TILE
ANGLE = BLANK | ANGLE_WINDOW_TILE

BOTTOM_WINDOWS = [
    Window.TRADE_ANIMATION_SEND,
    Window.TRADE_ANIMATION_RECV,
    Window.LEARN_MOVE_MESSAGE,
    Window.EVOLUTION_ANIMATION,
]


def cell(console, screen, x, y):
    return console.get_screen(screen)[x + y * X_SIZE]


@pytest.mark.parametrize("window", list(Window))
@pytest.mark.parametrize("japanese", [False, True])
def test_layout_fits_visible_screen(window, japanese):
    x, y, x_size, y_size, screen = window_layout(window, japanese)
    assert x >= 0 and y >= 0
    assert x + x_size <= TOTAL_X_SIZE
    assert y + y_size <= TOTAL_Y_SIZE
    assert 0 <= screen < 4


def test_trade_options_layout():
    assert window_layout(Window.TRADE_OPTIONS) == (0, TOTAL_Y_SIZE - 1, TOTAL_X_SIZE, 1, 1)


def test_crash_window_is_centered():
    assert window_layout(Window.CRASH) == (4, 7, 21, 5, 3)


@pytest.mark.parametrize("window", BOTTOM_WINDOWS)
def test_japanese_adds_a_row_to_bottom_windows(window):
    x, y, x_size, y_size, screen = window_layout(window, False)
    jx, jy, jx_size, jy_size, jscreen = window_layout(window, True)
    assert (jx, jx_size, jscreen) == (x, x_size, screen)
    assert jy_size == y_size + 1
    assert jy == y - 1
    assert y + y_size == TOTAL_Y_SIZE - 1
    assert jy + jy_size == TOTAL_Y_SIZE - 1


def test_waiting_window_moves_with_extra():
    base = window_layout(Window.WAITING)
    moved = window_layout(Window.WAITING, extra=3)
    assert moved[1] == base[1] + 3
    assert moved[0] == base[0] and moved[2:] == base[2:]


@pytest.mark.parametrize("entries", [0, 1, 3])
def test_evolution_window_grows_upwards(entries):
    base = window_layout(Window.EVOLUTION)
    grown = window_layout(Window.EVOLUTION, extra=entries)
    assert grown[3] == base[3] + 2 * entries
    assert grown[1] + grown[3] == base[1] + base[3]


def test_extra_is_ignored_elsewhere():
    assert window_layout(Window.MESSAGE, extra=5) == window_layout(Window.MESSAGE)


def test_small_window_border():
    console = TextConsole()
    create_window(console, 2, 3, 4, 2, 0)
    for col in range(2, 6):
        assert cell(console, 0, col, 2) == TOP
        assert cell(console, 0, col, 5) == BOTTOM
    for row in (3, 4):
        assert cell(console, 0, 1, row) == LEFT
        assert cell(console, 0, 6, row) == RIGHT
        for col in range(2, 6):
            assert cell(console, 0, col, row) == BLANK
    assert cell(console, 0, 1, 2) == ANGLE
    assert cell(console, 0, 6, 2) == ANGLE | HSWAP_TILE
    assert cell(console, 0, 1, 5) == ANGLE | VSWAP_TILE
    assert cell(console, 0, 6, 5) == ANGLE | HSWAP_TILE | VSWAP_TILE


def test_border_wraps_at_origin():
    console = TextConsole()
    create_window(console, 0, 0, 2, 2, 0)
    assert cell(console, 0, X_SIZE - 1, X_SIZE - 1) == ANGLE
    assert cell(console, 0, 2, 2) == ANGLE | HSWAP_TILE | VSWAP_TILE
    assert cell(console, 0, X_SIZE - 1, 0) == LEFT


def test_full_width_window_has_no_side_borders():
    console = TextConsole()
    create_window(console, 0, 10, TOTAL_X_SIZE, 1, 0)
    for col in range(TOTAL_X_SIZE + 1):
        assert cell(console, 0, col, 9) == TOP
        assert cell(console, 0, col, 11) == BOTTOM
    assert cell(console, 0, X_SIZE - 1, 10) == BLANK
    assert cell(console, 0, X_SIZE - 1, 9) == BLANK


def test_full_height_window_has_no_top_border():
    console = TextConsole()
    x, y, x_size, y_size, _ = window_layout(Window.OFFER)
    create_window(console, x, y, x_size, y_size, 0)
    for row in range(y_size + 1):
        assert cell(console, 0, x - 1, row) == LEFT
        assert cell(console, 0, x + x_size, row) == RIGHT
    assert cell(console, 0, x, X_SIZE - 1) == BLANK


def test_oversized_window_is_clamped():
    console = TextConsole()
    create_window(console, 20, 5, 20, 2, 0)
    assert cell(console, 0, X_SIZE - 1, 5) == RIGHT
    assert cell(console, 0, X_SIZE - 1, 4) == ANGLE | HSWAP_TILE
    assert cell(console, 0, 30, 4) == TOP


def test_zero_size_draws_nothing():
    console = TextConsole()
    before = list(console.get_screen(0))
    create_window(console, 5, 5, 0, 3, 0)
    assert console.get_screen(0) == before


def test_create_marks_current_layer_updated():
    console = TextConsole()
    console.flush()
    assert not any(console.updated_screens)
    create_window(console, 2, 3, 4, 2, 2)
    assert console.updated_screens == (True, False, False, False)


def test_reset_window_wraps_columns():
    console = TextConsole()
    reset_window(console, 30, 0, 4, 1, 1)
    for col in (30, 31, 0, 1):
        assert cell(console, 1, col, 0) == BLANK
    assert cell(console, 1, 2, 0) == 0


def test_open_then_clear_keeps_border_blanks_inside():
    console = TextConsole()
    x, y, x_size, y_size, screen = window_layout(Window.MESSAGE)
    open_window(console, Window.MESSAGE)
    tiles = console.get_screen(screen)
    for row in range(y, y + y_size):
        for col in range(x, x + x_size):
            tiles[col + row * X_SIZE] = 0x41
    clear_window(console, Window.MESSAGE)
    for row in range(y, y + y_size):
        for col in range(x, x + x_size):
            assert cell(console, screen, col, row) == BLANK
    assert cell(console, screen, x - 1, y) == LEFT
    assert cell(console, screen, x, y - 1) == TOP


@pytest.mark.parametrize("func", [create_window, reset_window])
def test_origin_outside_map_rejected(func):
    console = TextConsole()
    with pytest.raises(ValueError):
        func(console, X_SIZE, 0, 1, 1, 0)
    with pytest.raises(ValueError):
        func(console, 0, -1, 1, 1, 0)