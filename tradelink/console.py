"""A tile-based text console with double-buffered background layers.

The console models four background layers. Each has two tile maps of
``X_SIZE`` by ``Y_SIZE`` entries. Text is drawn into the map selected
for the active layer. ``flush`` applies pending changes the way the
display would at vertical blank. Each tile map entry holds a tile
number in its low bits and the text palette in its top four bits.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

SCREEN_WIDTH = 240
SCREEN_HEIGHT = 160
SCREEN_REAL_WIDTH = 0x100
SCREEN_REAL_HEIGHT = 0x100
X_LIMIT = SCREEN_WIDTH >> 3
Y_LIMIT = SCREEN_HEIGHT >> 3
X_SIZE = SCREEN_REAL_WIDTH >> 3
Y_SIZE = SCREEN_REAL_HEIGHT >> 3
SCREEN_HALF_X = X_LIMIT >> 1

PALETTE = 0xF
HSWAP_TILE = 0x400
VSWAP_TILE = 0x800
TOTAL_BG = 4
FONT_TILES = 0x100

REGULAR_FILL = 0
BLANK_FILL = 1

GEN3_EOL = 0xFF
GENERIC_TICKS_CHAR = 0xFD
GENERIC_CIRCLE_CHAR = 0xFE
_TICKS_RANGES = ((0x37, 0x4A), (0x87, 0x9A))
_CIRCLE_RANGES = ((0x4B, 0x4F), (0x9B, 0x9F))


def _in_ranges(value: int, ranges: Sequence[tuple[int, int]]) -> bool:
    return any(low <= value <= high for low, high in ranges)


def _pad(digits: str, width: int, fill: str) -> str:
    if len(fill) != 1:
        raise ValueError("fill must be a single character")
    return fill * max(width - len(digits), 0) + digits


def format_base_10(number: int, width: int = 0, fill: str = " ") -> str:
    """Render a signed 32-bit number in decimal, padded to ``width``."""
    number &= 0xFFFFFFFF
    if number >= 0x80000000:
        number -= 0x100000000
    return _pad(str(number), width, fill)


def format_base_16(number: int, width: int = 0, fill: str = " ") -> str:
    """Render an unsigned 32-bit number in upper-case hex, padded to ``width``."""
    return _pad(format(number & 0xFFFFFFFF, "X"), width, fill)


def _as_bytes(text: Any) -> bytes:
    if isinstance(text, str):
        return text.encode("latin-1")
    return bytes(text)


def _clamp_bg(bg_num: int) -> int:
    return min(bg_num, TOTAL_BG - 1)


class TextConsole:
    """Text drawing on simulated background layers."""

    def __init__(self) -> None:
        self._maps = [[[0] * (X_SIZE * Y_SIZE) for _ in range(2)] for _ in range(TOTAL_BG)]
        self._buffer_index = [0] * TOTAL_BG
        self._enabled = [False] * TOTAL_BG
        self._updated = [False] * TOTAL_BG
        self._positions = [(0, 0)] * TOTAL_BG
        self._displayed = [False] * TOTAL_BG
        self._shown_buffer = [0] * TOTAL_BG
        self._applied_positions = [(0, 0)] * TOTAL_BG
        self._screen_num = 0
        self._loaded_screen_num = 0
        self._x = 0
        self._y = 0
        self.gen3_table: Sequence[int] | None = None
        self.set_screen(0)
        self.reset_screen(REGULAR_FILL)
        self.enable_screen(0)

    # State inspection

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    @property
    def screen_num(self) -> int:
        return self._screen_num

    @property
    def loaded_screen_num(self) -> int:
        """The active layer at the last flush."""
        return self._loaded_screen_num

    @property
    def enabled_screens(self) -> tuple[bool, ...]:
        return tuple(self._enabled)

    @property
    def displayed_screens(self) -> tuple[bool, ...]:
        """Which layers were shown at the last flush."""
        return tuple(self._displayed)

    @property
    def updated_screens(self) -> tuple[bool, ...]:
        return tuple(self._updated)

    @property
    def buffer_indexes(self) -> tuple[int, ...]:
        """Which of the two tile maps each layer currently draws into."""
        return tuple(self._buffer_index)

    @property
    def shown_buffers(self) -> tuple[int, ...]:
        """Which tile map each layer displayed at the last flush."""
        return tuple(self._shown_buffer)

    @property
    def bg_positions(self) -> tuple[tuple[int, int], ...]:
        """Scroll offsets applied at the last flush."""
        return tuple(self._applied_positions)

    # Layers

    def set_screen(self, bg_num: int) -> None:
        """Select the layer that text is drawn on."""
        self._screen_num = _clamp_bg(bg_num)

    def get_screen(self, bg_num: int) -> list[int]:
        """Return the tile map a layer currently draws into."""
        bg_num = _clamp_bg(bg_num)
        return self._maps[bg_num][self._buffer_index[bg_num]]

    @property
    def _screen(self) -> list[int]:
        return self.get_screen(self._screen_num)

    def _set_updated_screen(self) -> None:
        self._updated[self._screen_num] = True

    def reset_screen(self, blank_fill: int = REGULAR_FILL) -> None:
        """Clear the active layer and move the cursor to the top left."""
        self._set_updated_screen()
        value = (PALETTE << 12) | (1 if blank_fill else 0)
        self._screen[:] = [value] * (X_SIZE * Y_SIZE)
        self._x = 0
        self._y = 0

    def enable_screen(self, bg_num: int) -> None:
        self._enabled[_clamp_bg(bg_num)] = True

    def disable_screen(self, bg_num: int) -> None:
        self._enabled[_clamp_bg(bg_num)] = False

    def swap_buffer_screen(self, bg_num: int, effective_swap: bool) -> None:
        """Mark a layer for update, swapping its maps first if it is hidden."""
        bg_num = _clamp_bg(bg_num)
        if effective_swap and not self._displayed[bg_num]:
            self._buffer_index[bg_num] ^= 1
        self._updated[bg_num] = True

    def set_bg_pos(self, bg_num: int, x: int, y: int) -> None:
        """Set a layer's scroll offset; negative values count from the end."""
        bg_num = _clamp_bg(bg_num)
        if x < 0:
            x += SCREEN_REAL_WIDTH
        if y < 0:
            y += SCREEN_REAL_HEIGHT
        self._positions[bg_num] = (x & 0xFF, y & 0xFF)

    def bg_priority(self, bg_num: int) -> int:
        """Higher-numbered layers are drawn below lower-numbered ones."""
        return TOTAL_BG - 1 - _clamp_bg(bg_num)

    def flush(self) -> None:
        """Apply pending layer changes as the display would at vertical blank."""
        for bg_num in range(TOTAL_BG):
            if self._updated[bg_num]:
                self._shown_buffer[bg_num] = self._buffer_index[bg_num]
                self._updated[bg_num] = False
                self._buffer_index[bg_num] ^= 1
        self._applied_positions = list(self._positions)
        self._displayed = list(self._enabled)
        self._loaded_screen_num = self._screen_num

    # Cursor

    def set_text_x(self, x: int) -> None:
        x %= X_SIZE
        self._x = x if x < X_LIMIT else X_LIMIT - 1

    def set_text_y(self, y: int) -> None:
        self._y = y % Y_SIZE
        self._x = 0

    def new_line(self) -> None:
        self._x = 0
        self._y += 1
        if self._y >= Y_SIZE:
            self._y = 0

    # Drawing

    def write_char(self, character: int) -> bool:
        """Draw one tile and advance; return True if the line wrapped."""
        self._screen[self._x + self._y * X_SIZE] = (character | (PALETTE << 12)) & 0xFFFF
        self._x += 1
        if self._x >= X_LIMIT:
            self.new_line()
            return True
        return False

    def _write_above_char(self, character: int) -> None:
        row = self._y - 1 if self._y else Y_SIZE - 1
        self._screen[self._x + row * X_SIZE] = (character | (PALETTE << 12)) & 0xFFFF

    def _write_string(self, text: Any) -> None:
        for ch in _as_bytes(text):
            if ch == 0 or self.write_char(ch):
                return

    def write_gen3(
        self,
        text: bytes,
        size_max: int,
        is_jp: bool,
        table: Sequence[int] | None = None,
    ) -> None:
        """Draw game-encoded text up to its terminator or ``size_max`` characters.

        Japanese text uses the second font bank directly, with voicing
        marks drawn on the row above. Other text is mapped through a
        256-entry table, by default ``gen3_table``.
        """
        if table is None:
            table = self.gen3_table
        if not is_jp and (table is None or len(table) < 256):
            raise ValueError("a 256-entry conversion table is required")
        for count, ch in enumerate(_as_bytes(text), start=1):
            if ch == GEN3_EOL:
                return
            if is_jp:
                if _in_ranges(ch, _TICKS_RANGES):
                    self._write_above_char(GENERIC_TICKS_CHAR + FONT_TILES)
                elif _in_ranges(ch, _CIRCLE_RANGES):
                    self._write_above_char(GENERIC_CIRCLE_CHAR + FONT_TILES)
                if self.write_char(ch + FONT_TILES):
                    return
            elif self.write_char(table[ch]):
                return
            if count == size_max:
                return

    def _write_digits(self, digits: str) -> None:
        for ch in digits:
            if self.write_char(ord(ch)):
                return

    def _add_spacing(self, prev_x: int, prev_y: int, space: int) -> None:
        if prev_y != self._y:
            return
        new_x = max(prev_x + (space & 0xFF), self._x)
        if new_x >= X_LIMIT:
            self.new_line()
        else:
            self._x = new_x

    def printf(self, fmt: str, *args: Any) -> None:
        """Draw a format string whose control characters consume arguments.

        ``\\x01`` string, ``\\x02`` character, ``\\x03`` decimal,
        ``\\x04`` hex, ``\\x05`` game text (text, size, is_jp),
        ``\\x09``/``\\x0B`` decimal padded with spaces/zeros to a width,
        ``\\x0C``/``\\x0D`` hex padded likewise. ``\\x11``, ``\\x13``,
        ``\\x14`` and ``\\x15`` are the unpadded forms followed by a
        minimum column advance. Any other character is drawn as is.
        """
        self._set_updated_screen()
        pending: Iterator[Any] = iter(args)

        def take() -> Any:
            try:
                return next(pending)
            except StopIteration:
                raise ValueError("not enough arguments for format string") from None

        for character in fmt:
            prev_x, prev_y = self._x, self._y
            if character == "\x01":
                self._write_string(take())
            elif character == "\x02":
                self.write_char(int(take()) & 0xFF)
            elif character == "\x03":
                self._write_digits(format_base_10(take()))
            elif character == "\x04":
                self._write_digits(format_base_16(take()))
            elif character == "\x05":
                self.write_gen3(take(), take(), take())
            elif character == "\x09":
                self._write_digits(format_base_10(take(), take(), " "))
            elif character == "\x0b":
                self._write_digits(format_base_10(take(), take(), "0"))
            elif character == "\x0c":
                self._write_digits(format_base_16(take(), take(), " "))
            elif character == "\x0d":
                self._write_digits(format_base_16(take(), take(), "0"))
            elif character == "\x11":
                self._write_string(take())
                self._add_spacing(prev_x, prev_y, take())
            elif character == "\x13":
                self._write_digits(format_base_10(take()))
                self._add_spacing(prev_x, prev_y, take())
            elif character == "\x14":
                self._write_digits(format_base_16(take()))
                self._add_spacing(prev_x, prev_y, take())
            elif character == "\x15":
                self.write_gen3(take(), take(), take())
                self._add_spacing(prev_x, prev_y, take())
            elif character == "\n":
                self.new_line()
            else:
                self.write_char(ord(character) & 0xFFFF)