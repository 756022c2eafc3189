"""A simulated two-bank flash save chip.

The chip holds two banks of 64 KiB each. Accesses go through a bank
register: an address selects its bank and is reduced to an offset
inside it. Writes follow flash rules: they can only clear bits, so a
byte must be erased before it can take any value.
"""

from __future__ import annotations

from collections.abc import Iterator

SECTOR_SIZE_BITS = 12
SECTOR_SIZE = 1 << SECTOR_SIZE_BITS
BANK_SIZE = 0x10000
NUM_BANKS = 2
FLASH_SIZE = NUM_BANKS * BANK_SIZE
ERASED_BYTE = 0xFF

MACRONIX_MAN_ID = 0xC2
SANYO_MAN_ID = 0x62
DEFAULT_MAN_ID = 0

_WRITE_ATTEMPTS = 3
_MACRONIX_LIKE = frozenset({MACRONIX_MAN_ID, SANYO_MAN_ID, DEFAULT_MAN_ID})


class FlashSave:
    """Byte-addressed access to a simulated flash save."""

    def __init__(self, data: bytes | None = None, manufacturer_id: int = MACRONIX_MAN_ID) -> None:
        if data is None:
            memory = bytearray([ERASED_BYTE]) * FLASH_SIZE
        else:
            if len(data) > FLASH_SIZE:
                raise ValueError(f"save data larger than {FLASH_SIZE:#x} bytes")
            memory = bytearray(data)
            memory.extend(bytes([ERASED_BYTE]) * (FLASH_SIZE - len(memory)))
        self._memory = memory
        self._current_bank = NUM_BANKS
        self.manufacturer_id = manufacturer_id
        self.is_macronix = manufacturer_id in _MACRONIX_LIKE

    @property
    def data(self) -> bytes:
        """A copy of the whole chip contents."""
        return bytes(self._memory)

    @property
    def current_bank(self) -> int:
        """The selected bank, or ``NUM_BANKS`` before the first access."""
        return self._current_bank

    def _bank_check(self, address: int) -> int:
        address %= FLASH_SIZE
        self._current_bank = address // BANK_SIZE
        return address % BANK_SIZE

    def _physical(self, offset: int) -> int:
        return self._current_bank * BANK_SIZE + offset

    def _write_direct(self, offset: int, value: int) -> None:
        position = self._physical(offset)
        for _ in range(_WRITE_ATTEMPTS):
            if self._memory[position] == value:
                break
            self._memory[position] &= value

    def _read_range(self, address: int, size: int) -> Iterator[int]:
        offset = self._bank_check(address)
        if offset + size > BANK_SIZE:
            for i in range(size):
                yield self.read_byte(offset + i)
        else:
            start = self._physical(offset)
            yield from self._memory[start : start + size]

    def read_byte(self, address: int) -> int:
        offset = self._bank_check(address)
        return self._memory[self._physical(offset)]

    def read_bytes(self, address: int, size: int) -> bytes:
        if size < 0:
            raise ValueError("size must not be negative")
        return bytes(self._read_range(address, size))

    def read_short(self, address: int) -> int:
        return int.from_bytes(self.read_bytes(address, 2), "little")

    def read_int(self, address: int) -> int:
        return int.from_bytes(self.read_bytes(address, 4), "little")

    def write_byte(self, address: int, value: int) -> None:
        offset = self._bank_check(address)
        self._write_direct(offset, value & 0xFF)

    def write_bytes(self, data: bytes, address: int) -> None:
        data = bytes(data)
        offset = self._bank_check(address)
        if offset + len(data) > BANK_SIZE:
            for i, value in enumerate(data):
                self.write_byte(offset + i, value)
        else:
            for i, value in enumerate(data):
                self._write_direct(offset + i, value)

    def write_short(self, address: int, value: int) -> None:
        self.write_bytes((value & 0xFFFF).to_bytes(2, "little"), address)

    def write_int(self, address: int, value: int) -> None:
        self.write_bytes((value & 0xFFFFFFFF).to_bytes(4, "little"), address)

    def matches(self, data: bytes, address: int) -> bool:
        """Tell whether the save holds ``data`` at ``address``."""
        data = bytes(data)
        return self.read_bytes(address, len(data)) == data

    def erase_sector(self, address: int) -> None:
        """Reset the sector holding ``address`` to erased bytes."""
        offset = self._bank_check(address)
        offset = (offset >> SECTOR_SIZE_BITS) << SECTOR_SIZE_BITS
        start = self._physical(offset)
        self._memory[start : start + SECTOR_SIZE] = bytes([ERASED_BYTE]) * SECTOR_SIZE