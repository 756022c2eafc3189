"""Patch sets for link-cable data blocks.

On the wire the byte ``0xFE`` means "no data", so it cannot appear
inside a transferred block. Before sending, every ``0xFE`` in a region
is replaced with ``0xFF``, and its position is recorded in a separate
patch set. The receiver applies the patch set to put the original bytes
back.

A patch set lists positions counted from 1 within chunks of ``0xFC``
bytes. A ``0xFF`` entry moves on to the next chunk, and zero entries are
ignored. The entry after the last position is ``0xFF``. When the patch
set runs out of room, its last entry is forced to ``0xFF``.
"""

from __future__ import annotations

NO_ACTION_BYTE = 0xFE
PATCHED_BYTE = 0xFF
CHUNK_SIZE = NO_ACTION_BYTE - 2
CHUNK_END = 0xFF


def prepare_patch_set(
    buffer: bytes,
    start_pos: int,
    size: int,
    patch_set_size: int,
    base_pos: int = 0,
) -> tuple[bytes, bytes]:
    """Remove ``0xFE`` bytes from ``buffer[start_pos:start_pos + size]``.

    Returns the patched buffer and a patch set of ``patch_set_size``
    bytes whose entries start at ``base_pos``. With a zero-sized patch
    set the buffer is returned unchanged.
    """
    if start_pos < 0 or size < 0 or patch_set_size < 0 or base_pos < 0:
        raise ValueError("positions and sizes must not be negative")
    if start_pos + size > len(buffer):
        raise ValueError("region lies outside the buffer")
    out = bytearray(buffer)
    patch_set = bytearray(patch_set_size)
    if not patch_set_size:
        return bytes(out), bytes(patch_set)
    if base_pos >= patch_set_size:
        raise ValueError("base_pos lies outside the patch set")

    cursor = base_pos

    def push(value: int) -> None:
        nonlocal cursor
        patch_set[cursor] = value
        cursor += 1
        if cursor >= patch_set_size:
            cursor = patch_set_size - 1
            patch_set[cursor] = CHUNK_END

    base = start_pos
    for position in range(start_pos, start_pos + size):
        if position - base == CHUNK_SIZE:
            base += CHUNK_SIZE
            push(CHUNK_END)
        if out[position] == NO_ACTION_BYTE:
            out[position] = PATCHED_BYTE
            push((position + 1 - base) & 0xFF)

    if size + start_pos - base > 0:
        patch_set[cursor] = CHUNK_END
    return bytes(out), bytes(patch_set)


def apply_patch_set(
    buffer: bytes,
    patch_set: bytes,
    start_pos: int,
    size: int,
    base_pos: int = 0,
) -> bytes:
    """Restore the ``0xFE`` bytes a patch set records.

    Positions at or past ``size`` within the region are ignored.
    """
    if start_pos < 0 or size < 0 or base_pos < 0:
        raise ValueError("positions and sizes must not be negative")
    out = bytearray(buffer)
    base = 0
    for entry in bytes(patch_set)[base_pos:]:
        if not entry:
            continue
        if entry == CHUNK_END:
            base += CHUNK_SIZE
            if base >= size:
                break
        elif entry <= CHUNK_SIZE and entry + base - 1 < size:
            position = entry + start_pos + base - 1
            if position >= len(out):
                raise ValueError("patch set points outside the buffer")
            out[position] = NO_ACTION_BYTE
    return bytes(out)


def prepare_mail_gen2(size: int, patch_set_size: int, start_pos: int) -> tuple[bytes, bytes]:
    """Build an empty mail block of ``size`` bytes and its patch set.

    The patch set covers ``size`` bytes starting at ``start_pos`` of the
    zero-filled data, so it holds only chunk markers.
    """
    if size < 0 or start_pos < 0:
        raise ValueError("positions and sizes must not be negative")
    scanned = bytes(start_pos + size)
    _, patch_set = prepare_patch_set(scanned, start_pos, size, patch_set_size, 0)
    return bytes(size), patch_set