"""Pieces of the data blocks exchanged over the link cable.

The older games send a party as a list of species indexes followed by
the party data. A ``0xFF`` index marks the end of the party, and a
``0xFD`` index marks an egg. Names are fixed-size and end with the
older games' terminator. The newer games send one block guarded by
three 32-bit checksums.
"""

from __future__ import annotations

from collections.abc import Sequence

PARTY_SIZE = 6
MON_INDEX_SIZE = PARTY_SIZE + 1

GEN2_EGG = 253
GEN2_NO_MON = 255
GEN2_EOL = 0x50

NO_ACTION_BYTE = 0xFE

BUFFER_SIZE = 0x500
NUM_SIZES = 4
SIZE_STOP = 0xFFFF
RANDOM_DATA_SIZE = 10
PATCH_SET_SIZE = 0xC5
PATCH_SET_BASE_POS = 7
USELESS_SYNC_BYTES = 5
USELESS_SYNC_VALUE = 0x20
SAFETY_BYTES_NUM = 3
DEFAULT_FILLER = 0

_MASK_32 = 0xFFFFFFFF


def party_mon_indexes(species: Sequence[int], eggs: Sequence[bool] | None = None) -> bytes:
    """Build the species index list sent ahead of a party.

    At most ``PARTY_SIZE`` members are listed. Eggs are listed as
    ``GEN2_EGG``; the list is filled out to ``MON_INDEX_SIZE`` entries
    with ``GEN2_NO_MON``.
    """
    if eggs is not None and len(eggs) != len(species):
        raise ValueError("species and eggs must have the same length")
    members = list(species)[:PARTY_SIZE]
    flags = list(eggs)[:PARTY_SIZE] if eggs is not None else [False] * len(members)
    indexes = bytearray()
    for value, is_egg in zip(members, flags):
        if not 0 <= value <= 0xFF:
            raise ValueError(f"species index {value} does not fit in a byte")
        indexes.append(GEN2_EGG if is_egg else value)
    indexes.extend([GEN2_NO_MON] * (MON_INDEX_SIZE - len(indexes)))
    return bytes(indexes)


def count_party_indexes(indexes: bytes) -> int:
    """Count the party members listed before the end marker, at most six."""
    count = 0
    for value in bytes(indexes)[:PARTY_SIZE]:
        if value == GEN2_NO_MON:
            break
        count += 1
    return count


def word_checksum(data: bytes) -> int:
    """Sum the little-endian 32-bit words of ``data``, modulo 2**32."""
    data = bytes(data)
    if len(data) % 4:
        raise ValueError("data length must be a multiple of four")
    total = sum(int.from_bytes(data[i : i + 4], "little") for i in range(0, len(data), 4))
    return total & _MASK_32


def _read_word(block: bytes, offset: int) -> int:
    if offset < 0 or offset + 4 > len(block):
        raise ValueError(f"checksum offset {offset:#x} lies outside the block")
    return int.from_bytes(block[offset : offset + 4], "little")


def _region(block: bytes, bounds: tuple[int, int]) -> bytes:
    start, stop = bounds
    if not 0 <= start <= stop <= len(block):
        raise ValueError(f"region {start:#x}-{stop:#x} lies outside the block")
    return block[start:stop]


def gen3_checksums_match(
    block: bytes,
    mail_range: tuple[int, int],
    party_range: tuple[int, int],
    checksum_offsets: tuple[int, int, int],
) -> bool:
    """Check the three checksums of a received block.

    ``mail_range`` and ``party_range`` are ``(start, stop)`` byte ranges.
    ``checksum_offsets`` gives where the mail, party and final checksums
    are stored. The final checksum covers every byte before it.
    """
    block = bytes(block)
    mail_offset, party_offset, final_offset = checksum_offsets
    if word_checksum(_region(block, mail_range)) != _read_word(block, mail_offset):
        return False
    if word_checksum(_region(block, party_range)) != _read_word(block, party_offset):
        return False
    return word_checksum(block[:final_offset]) == _read_word(block, final_offset)


def sanitize_gen12_name(name: bytes, size: int) -> bytes:
    """Fit a name into ``size`` bytes that are safe to send.

    Bytes the link protocol reserves (``0xFE`` and ``0xFD``) become
    ``0xFC``; the name is padded with the terminator, and its last byte
    is always the terminator.
    """
    if size < 1:
        raise ValueError("size must be at least one")
    out = bytearray(bytes(name)[:size])
    out.extend([GEN2_EOL] * (size - len(out)))
    for i, value in enumerate(out):
        if value in (NO_ACTION_BYTE, NO_ACTION_BYTE - 1):
            out[i] = NO_ACTION_BYTE - 2
    out[size - 1] = GEN2_EOL
    return bytes(out)