# tradelink

Helpers for the data that handheld monster-collecting games keep in
their flash saves and exchange over the link cable, together with a
simulated tile-based text console for drawing their menus.

## Modules

- `tradelink.rng` – `Rng`, a 64-bit linear congruential generator seeded
  from two 32-bit halves. `next()` steps it and returns the upper 32 bits
  of the state; `advance()` steps it only while advances are enabled
  (`disable_advances()` / `enable_advances()`); `increase(low, high)` adds
  a 64-bit value to the state.
- `tradelink.flash` – `FlashSave`, an in-memory two-bank (2 × 64 KiB)
  flash chip. It offers `read_byte`, `read_short`, `read_int`,
  `read_bytes`, `write_byte`, `write_short`, `write_int`, `write_bytes`,
  `matches` and `erase_sector`. Values are little-endian, addresses wrap
  around the chip, and writes follow flash rules: they can only clear
  bits, so a sector must be erased (to `0xFF`) before it can be rewritten.
  A new chip with no data given starts fully erased.
- `tradelink.console` – `TextConsole`, four background layers, each with
  two tile maps of 32 × 32 entries, a text cursor, and `flush()` to apply
  pending changes as the display would at vertical blank. `printf`
  understands control characters that consume arguments (strings,
  characters, decimal and hex numbers with optional padding, game text
  and column spacing). `format_base_10` and `format_base_16` render
  numbers the same way as strings.
- `tradelink.windows` – bordered windows drawn on a console's tile maps:
  `create_window` / `reset_window` for any rectangle, and the `Window`
  enum with `window_layout`, `open_window` and `clear_window` for the
  named windows of the interface.
- `tradelink.patch_set` – `prepare_patch_set` removes the reserved byte
  `0xFE` from a region of a block and records where it was;
  `apply_patch_set` puts it back; `prepare_mail_gen2` builds an empty
  mail block with its patch set.
- `tradelink.trade_buffers` – `party_mon_indexes` and
  `count_party_indexes` for the species index list that precedes an
  older-generation party, `word_checksum` and `gen3_checksums_match` for
  the checksums of a newer-generation trade block, and
  `sanitize_gen12_name` to fit a name into a fixed-size field.

## Example

```python
from tradelink.rng import Rng
from tradelink.flash import FlashSave
from tradelink.console import TextConsole, format_base_16
from tradelink.windows import Window, open_window
from tradelink.patch_set import prepare_patch_set, apply_patch_set
from tradelink.trade_buffers import party_mon_indexes, count_party_indexes

rng = Rng(0x1234, 0)
value = rng.next()

save = FlashSave()
save.write_int(0x100, 0xDEADBEEF)
assert save.read_int(0x100) == 0xDEADBEEF

console = TextConsole()
console.printf("HP \x03", 42)
open_window(console, Window.MESSAGE)
assert format_base_16(255, 4, "0") == "00FF"

block = b"\x00\xfe\x00"
sent, patch_set = prepare_patch_set(block, 0, len(block), 4)
assert apply_patch_set(sent, patch_set, 0, len(block)) == block

indexes = party_mon_indexes([25, 1], [False, True])
assert count_party_indexes(indexes) == 2
```

## What the package does not do

It has no command-line program and no real hardware access: the flash
chip and the console are in-memory models. It does not convert between
the games' text encodings, does not identify which game a cartridge or
save belongs to, and does not decode or encode party members; it only
handles the buffer pieces described above.

## Tests

```
pip install .[test]
pytest
```