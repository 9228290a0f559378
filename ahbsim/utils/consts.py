"""Constants and utility values for the bus model."""


class ConstUtils:
    """Bitwise masks and window constants."""

    # Bitwise masks for different data widths
    MASK_8_BITS = 0xFF
    """8-bit mask: 0xFF"""

    MASK_16_BITS = 0xFFFF
    """16-bit mask: 0xFFFF"""

    MASK_32_BITS = 0xFFFFFFFF
    """32-bit mask: 0xFFFFFFFF"""

    WINDOW_SIZE = 0x1000
    """Every peripheral decodes a single 4 KiB window."""


ADDR_MASK = ConstUtils.MASK_32_BITS
DATA_MASK = ConstUtils.MASK_32_BITS
WINDOW_SIZE = ConstUtils.WINDOW_SIZE
WINDOW_OFFSET_MASK = WINDOW_SIZE - 1
BYTE_LANES = 4


def window_page(address: int) -> int:
    """Return the upper address bits that select a 4 KiB window."""
    return (address & ADDR_MASK) >> 12


def word_offset(address: int) -> int:
    """Window-relative offset of the 32-bit word containing address."""
    return address & WINDOW_OFFSET_MASK & ~(BYTE_LANES - 1)
