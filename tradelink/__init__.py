"""Link-trade buffers, flash save access, random numbers and a tile text console."""

__version__ = "0.1.0"
__all__ = ["console", "flash", "patch_set", "rng", "trade_buffers", "windows"]