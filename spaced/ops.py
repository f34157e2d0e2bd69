"""Instruction implementations of the 6502 processor model."""

from __future__ import annotations

from .addressing import AddressingMode
from .chip import Chip, Flag


def _signed(byte: int) -> int:
    byte &= 0xFF
    return byte - 0x100 if byte & 0x80 else byte


class Cpu(Chip):
    """A chip that can execute individual instructions.

    Each method runs one instruction whose opcode has already been fetched,
    so the program counter points at the instruction's first operand byte.
    """

    # Branches

    def _branch_if(self, flag: Flag, expected: int) -> None:
        offset = _signed(self.read_word(AddressingMode.RELATIVE))
        if self.get_flag(flag) == expected:
            self.pc = (self.pc + offset) & 0xFFFF

    def beq(self) -> None:
        """Branch when the zero flag is set."""
        self._branch_if(Flag.ZERO, 1)

    def bmi(self) -> None:
        """Branch when the negative flag is set."""
        self._branch_if(Flag.NEGATIVE, 1)

    def bpl(self) -> None:
        """Branch when the negative flag is clear."""
        self._branch_if(Flag.NEGATIVE, 0)

    def bne(self) -> None:
        """Branch when the zero flag is clear."""
        self._branch_if(Flag.ZERO, 0)

    def bcs(self) -> None:
        """Branch when the carry flag is set."""
        self._branch_if(Flag.CARRY, 1)

    def bcc(self) -> None:
        """Branch when the carry flag is clear."""
        self._branch_if(Flag.CARRY, 0)

    def bvc(self) -> None:
        """Branch when the overflow flag is clear."""
        self._branch_if(Flag.OVERFLOW, 0)

    def bvs(self) -> None:
        """Branch when the overflow flag is set."""
        self._branch_if(Flag.OVERFLOW, 1)

    # Stores

    def stx(self, mode: AddressingMode) -> None:
        """Store X into memory."""
        self.perform_write(mode, self.x)

    def sty(self, mode: AddressingMode) -> None:
        """Store Y into memory."""
        self.perform_write(mode, self.y)

    def sta(self, mode: AddressingMode) -> None:
        """Store the accumulator into memory."""
        self.perform_write(mode, self.ac)

    # Increments and decrements

    def _modify_memory(self, mode: AddressingMode, delta: int) -> None:
        address, value = self.perform_read(mode)
        result = ((value & 0xFF) + delta) & 0xFF
        self.update_zero_negative(result)
        self.write_direct(address, result)

    def inc(self, mode: AddressingMode) -> None:
        """Increment a byte in memory."""
        self._modify_memory(mode, 1)

    def dec(self, mode: AddressingMode) -> None:
        """Decrement a byte in memory."""
        self._modify_memory(mode, -1)

    def dey(self) -> None:
        """Decrement Y."""
        self.y = (self.y - 1) & 0xFF
        self.update_zero_negative(self.y)

    def dex(self) -> None:
        """Decrement X."""
        self.x = (self.x - 1) & 0xFF
        self.update_zero_negative(self.x)

    def iny(self) -> None:
        """Increment Y."""
        self.y = (self.y + 1) & 0xFF
        self.update_zero_negative(self.y)

    def inx(self) -> None:
        """Increment X."""
        self.x = (self.x + 1) & 0xFF
        self.update_zero_negative(self.x)

    # Jumps and subroutines

    def _push_address(self, address: int) -> None:
        self.stack_push((address >> 8) & 0xFF)
        self.stack_push(address & 0xFF)

    def jsr(self) -> None:
        """Jump to a subroutine, saving the return address on the stack."""
        self._push_address((self.pc + 1) & 0xFFFF)
        self.pc = self.read_addr(AddressingMode.ABSOLUTE)

    def rts(self) -> None:
        """Return from a subroutine."""
        lo = self.stack_pull()
        hi = self.stack_pull()
        self.pc = (((hi << 8) | lo) + 1) & 0xFFFF

    def jmp(self, mode: AddressingMode) -> None:
        """Jump to the operand address."""
        self.pc = self.read_addr(mode) & 0xFFFF

    # Stack

    def pla(self) -> None:
        """Pull the accumulator from the stack."""
        value = self.stack_pull()
        self.ac = value
        self.update_zero_negative(value)

    def pha(self) -> None:
        """Push the accumulator onto the stack."""
        self.stack_push(self.ac)

    # Comparisons

    def _compare(self, register: int, mode: AddressingMode) -> None:
        value = self.read_word(mode)
        self.update_carry(register >= value)
        self.update_zero_negative((register - value) & 0xFF)

    def cpy(self, mode: AddressingMode) -> None:
        """Compare Y with memory."""
        self._compare(self.y, mode)

    def cpx(self, mode: AddressingMode) -> None:
        """Compare X with memory."""
        self._compare(self.x, mode)

    def cmp(self, mode: AddressingMode) -> None:
        """Compare the accumulator with memory."""
        self._compare(self.ac, mode)

    # Loads

    def lda(self, mode: AddressingMode) -> None:
        """Load the accumulator."""
        self.ac = self.read_word(mode)
        self.update_zero_negative(self.ac)

    def ldx(self, mode: AddressingMode) -> None:
        """Load X."""
        self.x = self.read_word(mode)
        self.update_zero_negative(self.x)

    def ldy(self, mode: AddressingMode) -> None:
        """Load Y."""
        self.y = self.read_word(mode)
        self.update_zero_negative(self.y)

    # Transfers

    def tay(self) -> None:
        """Transfer the accumulator to Y."""
        self.y = self.ac
        self.update_zero_negative(self.ac)

    def tya(self) -> None:
        """Transfer Y to the accumulator."""
        self.ac = self.y
        self.update_zero_negative(self.y)

    def txa(self) -> None:
        """Transfer X to the accumulator."""
        self.ac = self.x
        self.update_zero_negative(self.x)

    def txs(self) -> None:
        """Transfer X to the stack pointer, leaving flags alone."""
        self.sp = self.x

    def tsx(self) -> None:
        """Transfer the stack pointer to X."""
        self.x = self.sp
        self.update_zero_negative(self.x)

    def tax(self) -> None:
        """Transfer the accumulator to X."""
        self.x = self.ac
        self.update_zero_negative(self.ac)

    # Flag instructions

    def sec(self) -> None:
        """Set carry."""
        self.set_flag(Flag.CARRY, 1)

    def sei(self) -> None:
        """Set interrupt disable."""
        self.set_flag(Flag.INTERRUPT_DISABLE, 1)

    def sed(self) -> None:
        """Set decimal mode."""
        self.set_flag(Flag.DECIMAL, 1)

    def clc(self) -> None:
        """Clear carry."""
        self.set_flag(Flag.CARRY, 0)

    def cli(self) -> None:
        """Clear interrupt disable."""
        self.set_flag(Flag.INTERRUPT_DISABLE, 0)

    def cld(self) -> None:
        """Clear decimal mode."""
        self.set_flag(Flag.DECIMAL, 0)

    def clv(self) -> None:
        """Clear overflow."""
        self.set_flag(Flag.OVERFLOW, 0)

    # Arithmetic and logic

    def sbc(self, mode: AddressingMode) -> None:
        """Subtract memory and borrow from the accumulator."""
        value = self.read_word(mode)
        borrow = 1 - self.get_flag(Flag.CARRY)
        result = (self.ac - value - borrow) & 0xFFFF

        self.update_carry(self.ac >= value + borrow)
        self.update_zero_negative(result)
        overflow = ((self.ac ^ result) & (self.ac ^ value)) & 0x80
        self.update_overflow(overflow)

        self.ac = result & 0xFF

    def adc(self, mode: AddressingMode) -> None:
        """Add memory and carry to the accumulator."""
        value = self.read_word(mode)
        carry = self.get_flag(Flag.CARRY)
        result = self.ac + value + carry

        self.update_carry(result > 0xFF)
        self.update_zero_negative(result)
        signs_agree = int((~(self.ac ^ value) & 0x80) != 0)
        overflow = (self.ac ^ (result & 0xFF)) & signs_agree
        self.update_overflow(overflow)

        self.ac = result & 0xFF

    def eor(self, mode: AddressingMode) -> None:
        """Exclusive-or memory into the accumulator."""
        self.ac ^= self.read_word(mode)
        self.update_zero_negative(self.ac)

    def and_(self, mode: AddressingMode) -> None:
        """And memory into the accumulator."""
        self.ac &= self.read_word(mode)
        self.update_zero_negative(self.ac)

    def ora(self, mode: AddressingMode) -> None:
        """Or memory into the accumulator."""
        self.ac |= self.read_word(mode)
        self.update_zero_negative(self.ac)

    # Shifts and rotations

    def _shift(self, mode: AddressingMode, operation) -> None:
        if mode == AddressingMode.ACCUMULATOR:
            address = None
            value = self.ac
        else:
            address, word = self.perform_read(mode)
            value = word & 0xFF

        carry, result = operation(value)
        self.update_carry(carry)
        self.update_zero_negative(result)

        if address is None:
            self.ac = result
        else:
            self.write_direct(address, result)

    def asl(self, mode: AddressingMode) -> None:
        """Shift left, moving bit 7 into carry."""
        self._shift(mode, lambda v: ((v >> 7) & 1, (v << 1) & 0xFF))

    def lsr(self, mode: AddressingMode) -> None:
        """Shift right, moving bit 0 into carry."""
        self._shift(mode, lambda v: (v & 1, v >> 1))

    def rol(self, mode: AddressingMode) -> None:
        """Rotate left through carry."""
        old_carry = self.get_flag(Flag.CARRY)
        self._shift(mode, lambda v: ((v >> 7) & 1, ((v << 1) & 0xFF) | old_carry))

    def ror(self, mode: AddressingMode) -> None:
        """Rotate right through carry."""
        old_carry = self.get_flag(Flag.CARRY)
        self._shift(mode, lambda v: (v & 1, (old_carry << 7) | (v >> 1)))

    # Miscellaneous

    def brk(self) -> None:
        """Force an interrupt through the vector at 0xFFFE."""
        self._push_address((self.pc + 1) & 0xFFFF)
        self.stack_push(self.sr | Flag.BREAK.mask)
        self.set_flag(Flag.INTERRUPT_DISABLE, 1)

        lo = self.read_direct(0xFFFE)
        hi = self.read_direct(0xFFFF)
        self.pc = (hi << 8) | lo

    def nop(self) -> None:
        """Do nothing."""