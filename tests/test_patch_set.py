import random

import pytest

from tradelink.patch_set import (
    CHUNK_END,
    CHUNK_SIZE,
    NO_ACTION_BYTE,
    PATCHED_BYTE,
    apply_patch_set,
    prepare_mail_gen2,
    prepare_patch_set,
)


def _random_buffer(seed: int, length: int) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.choice([0, 1, 0x20, 0x50, NO_ACTION_BYTE, 0xFD]) for _ in range(length))


def test_no_marker_bytes_gives_only_end_entry():
    buffer = bytes(range(10))
    out, patch = prepare_patch_set(buffer, 0, 10, 8, 2)
    assert out == buffer
    assert len(patch) == 8
    assert patch[2] == CHUNK_END
    assert patch[:2] == bytes(2)
    assert patch[3:] == bytes(5)


def test_single_marker_is_recorded_and_replaced():
    buffer = bytearray(12)
    buffer[5] = NO_ACTION_BYTE
    out, patch = prepare_patch_set(bytes(buffer), 2, 10, 6, 0)
    assert out[5] == PATCHED_BYTE
    assert NO_ACTION_BYTE not in out
    assert patch[0] == 5 - 2 + 1
    assert patch[1] == CHUNK_END


def test_bytes_before_region_are_untouched():
    buffer = bytes([NO_ACTION_BYTE]) * 4 + bytes(4)
    out, patch = prepare_patch_set(buffer, 4, 4, 4, 0)
    assert out[:4] == bytes([NO_ACTION_BYTE]) * 4
    assert patch[0] == CHUNK_END


def test_chunk_markers_for_long_region():
    size = 2 * CHUNK_SIZE + 8
    out, patch = prepare_patch_set(bytes(size), 0, size, 10, 0)
    assert out == bytes(size)
    assert patch[:3] == bytes([CHUNK_END]) * 3
    assert patch[3:] == bytes(7)


def test_zero_sized_patch_set_leaves_buffer():
    buffer = bytes([NO_ACTION_BYTE, 1, 2])
    out, patch = prepare_patch_set(buffer, 0, 3, 0, 0)
    assert out == buffer
    assert patch == b""


def test_overflowing_patch_set_ends_with_marker():
    buffer = bytes([NO_ACTION_BYTE]) * 20
    out, patch = prepare_patch_set(buffer, 0, 20, 5, 0)
    assert len(patch) == 5
    assert patch[-1] == CHUNK_END
    assert out == bytes([PATCHED_BYTE]) * 20


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("start_pos,size,base_pos", [(0, 40, 0), (7, 300, 3), (11, 600, 7)])
def test_round_trip(seed, start_pos, size, base_pos):
    buffer = _random_buffer(seed, start_pos + size + 5)
    out, patch = prepare_patch_set(buffer, start_pos, size, size + base_pos + 10, base_pos)
    assert NO_ACTION_BYTE not in out[start_pos : start_pos + size]
    assert apply_patch_set(out, patch, start_pos, size, base_pos) == buffer


def test_apply_ignores_positions_past_size():
    patch = bytes([3, 9, CHUNK_END])
    out = apply_patch_set(bytes(10), patch, 0, 5, 0)
    assert out[2] == NO_ACTION_BYTE
    assert out[8] == 0


def test_apply_skips_entries_before_base_pos():
    patch = bytes([2, 0, 4, CHUNK_END])
    out = apply_patch_set(bytes(6), patch, 0, 6, 2)
    assert out[1] == 0
    assert out[3] == NO_ACTION_BYTE


def test_region_outside_buffer_raises():
    with pytest.raises(ValueError):
        prepare_patch_set(bytes(4), 2, 5, 4, 0)


def test_base_pos_outside_patch_set_raises():
    with pytest.raises(ValueError):
        prepare_patch_set(bytes(4), 0, 4, 3, 3)


def test_negative_size_raises():
    with pytest.raises(ValueError):
        apply_patch_set(bytes(4), bytes(2), 0, -1, 0)


def test_mail_international_layout():
    mail, patch = prepare_mail_gen2(0x11A, 0x67, 0xC6)
    assert mail == bytes(0x11A)
    assert len(patch) == 0x67
    assert patch[:2] == bytes([CHUNK_END, CHUNK_END])
    assert patch[2:] == bytes(0x67 - 2)


def test_mail_japanese_layout_round_trip():
    mail, patch = prepare_mail_gen2(0xFC, 0x21, 0)
    assert len(patch) == 0x21
    assert patch[0] == CHUNK_END
    assert apply_patch_set(mail, patch, 0, 0xFC, 0) == bytes(0xFC)