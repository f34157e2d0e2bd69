"""Addressing modes of the 6502 instruction set."""

import enum


class AddressingMode(enum.IntEnum):
    """How an instruction locates its operand."""

    ABSOLUTE = 0
    ABSOLUTE_X = 1
    ABSOLUTE_Y = 2
    IMMEDIATE = 3
    RELATIVE = 3
    IMPLIED = 4
    INDIRECT = 5
    X_INDIRECT = 6
    ZERO_PAGE = 7
    INDIRECT_Y = 8
    ZERO_PAGE_X = 9
    ZERO_PAGE_Y = 10
    ACCUMULATOR = 11