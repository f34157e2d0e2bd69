"""Registers, memory access and stack of the 6502 processor model."""

from __future__ import annotations

import enum
from collections.abc import Callable

from .addressing import AddressingMode

MEMORY_SIZE = 0x10000
STACK_BOTTOM = 0x0100
RESET_VECTOR = 0xFFFC


class ChipError(RuntimeError):
    """Raised when the processor reaches a state it cannot handle."""


class Flag(enum.IntEnum):
    """Bit positions in the status register."""

    CARRY = 0
    ZERO = 1
    INTERRUPT_DISABLE = 2
    DECIMAL = 3
    BREAK = 4
    UNUSED = 5
    OVERFLOW = 6
    NEGATIVE = 7

    @property
    def mask(self) -> int:
        return 1 << self.value


class MemoryAccess(enum.Enum):
    """Kind of memory access reported to callbacks."""

    READ = "read"
    WRITE = "write"


MemoryCallback = Callable[[MemoryAccess, int, int], int]


class Chip:
    """Processor state over a 64 KiB address space."""

    def __init__(self, memory: bytearray | None = None, quota: int = 0) -> None:
        self.memory = bytearray(MEMORY_SIZE) if memory is None else memory
        self.quota = quota
        self.halted = False
        self.pc = 0
        self.ac = 0
        self.x = 0
        self.y = 0
        self.sr = 0
        self.sp = 0xFF
        self._callbacks: list[MemoryCallback] = []

    def dump(self) -> str:
        """Return a one-line summary of the registers."""
        return (
            f"PC=0x{self.pc:04X} AC=0x{self.ac:02X} X=0x{self.x:02X} "
            f"Y=0x{self.y:02X} SR=0x{self.sr:02X} SP=0x{self.sp:02X}"
        )

    def add_memory_callback(self, callback: MemoryCallback) -> MemoryCallback:
        """Register a hook run on memory accesses; the newest runs first."""
        self._callbacks.insert(0, callback)
        return callback

    def load_rom(self, rom: bytes, rom_start: int) -> None:
        """Copy a ROM image into memory and jump to the reset vector."""
        end = rom_start + len(rom)
        if rom_start < 0 or end > len(self.memory):
            raise ChipError("ROM does not fit in memory")
        self.memory[rom_start:end] = rom
        lo = self.memory[RESET_VECTOR]
        hi = self.memory[RESET_VECTOR + 1]
        self.pc = (hi << 8) | lo

    def read_direct(self, address: int) -> int:
        """Read a byte, passing it through every memory callback."""
        address &= 0xFFFF
        value = self.memory[address]
        for callback in self._callbacks:
            value = callback(MemoryAccess.READ, address, value) & 0xFF
        return value

    def write_direct(self, address: int, value: int) -> None:
        """Write a byte after passing it through every memory callback."""
        address &= 0xFFFF
        value &= 0xFF
        for callback in self._callbacks:
            value = callback(MemoryAccess.WRITE, address, value) & 0xFF
        self.memory[address] = value

    def pc_inc(self) -> int:
        """Read the byte at the program counter and advance it."""
        value = self.read_direct(self.pc)
        self.pc = (self.pc + 1) & 0xFFFF
        return value

    def _fetch_address(self) -> int:
        lo = self.pc_inc()
        hi = self.pc_inc()
        return (hi << 8) | lo

    def perform_read(self, mode: AddressingMode) -> tuple[int, int]:
        """Resolve an operand; return its address and the 16-bit value there."""
        match mode:
            case AddressingMode.ABSOLUTE:
                address = self._fetch_address()
            case AddressingMode.ABSOLUTE_X:
                address = (self._fetch_address() + self.x) & 0xFFFF
            case AddressingMode.ABSOLUTE_Y:
                address = (self._fetch_address() + self.y) & 0xFFFF
            case AddressingMode.IMMEDIATE:
                address = self.pc
                self.pc_inc()
            case AddressingMode.ZERO_PAGE:
                address = self.pc_inc()
            case AddressingMode.INDIRECT_Y:
                zero_page = self.pc_inc()
                lo = self.read_direct(zero_page)
                hi = self.read_direct((zero_page + 1) & 0xFFFF)
                address = (((hi << 8) | lo) + self.y) & 0xFFFF
            case AddressingMode.ACCUMULATOR:
                raise ChipError("accumulator addressing is handled by each instruction")
            case _:
                raise ChipError(f"unhandled addressing mode for read: {mode!r}")

        low = self.read_direct(address)
        high = self.read_direct((address + 1) & 0xFF)
        return address, low | (high << 8)

    def perform_write(self, mode: AddressingMode, value: int) -> int:
        """Store a byte at the operand address, bypassing callbacks; return the address."""
        match mode:
            case AddressingMode.ABSOLUTE:
                address = self._fetch_address()
            case AddressingMode.ABSOLUTE_X:
                address = (self._fetch_address() + self.x) & 0xFFFF
            case AddressingMode.ZERO_PAGE:
                address = self.pc_inc()
            case AddressingMode.ZERO_PAGE_Y:
                address = (self.pc_inc() + self.y) & 0xFF
            case AddressingMode.INDIRECT_Y:
                zero_page = self.pc_inc()
                lo = self.read_direct(zero_page)
                hi = self.read_direct((zero_page + 1) & 0xFF)
                address = (((hi << 8) | lo) + self.y) & 0xFFFF
            case AddressingMode.ACCUMULATOR:
                raise ChipError("accumulator addressing is handled by each instruction")
            case _:
                raise ChipError(f"unhandled addressing mode for write: {mode!r}")

        self.memory[address] = value & 0xFF
        return address

    def read_addr(self, mode: AddressingMode) -> int:
        """Return the effective address of the operand."""
        return self.perform_read(mode)[0]

    def read_word(self, mode: AddressingMode) -> int:
        """Return the byte at the operand address."""
        return self.perform_read(mode)[1] & 0xFF

    def read_dword(self, mode: AddressingMode) -> int:
        """Return the 16-bit value at the operand address."""
        return self.perform_read(mode)[1]

    def stack_push(self, value: int) -> None:
        """Push a byte onto the hardware stack."""
        if self.sp == 0x00:
            raise ChipError("Stack overflow")
        self.write_direct(STACK_BOTTOM + self.sp, value)
        self.sp = (self.sp - 1) & 0xFF

    def stack_pull(self) -> int:
        """Pull a byte from the hardware stack."""
        if self.sp == 0xFF:
            raise ChipError("Stack underflow")
        self.sp = (self.sp + 1) & 0xFF
        return self.read_direct(STACK_BOTTOM + self.sp)

    def get_flag(self, flag: Flag) -> int:
        """Return a status flag as 0 or 1."""
        return (self.sr >> flag) & 1

    def set_flag(self, flag: Flag, value: int) -> None:
        """Set a status flag from a truth value."""
        self.sr &= ~(1 << flag) & 0xFF
        self.sr |= int(bool(value)) << flag

    def update_carry(self, value: int) -> None:
        self.set_flag(Flag.CARRY, value)

    def update_zero_negative(self, value: int) -> None:
        """Set ZERO and NEGATIVE from the low byte of a result."""
        value &= 0xFF
        self.set_flag(Flag.ZERO, value == 0)
        self.set_flag(Flag.NEGATIVE, value & 0x80)

    def update_overflow(self, value: int) -> None:
        self.set_flag(Flag.OVERFLOW, value)