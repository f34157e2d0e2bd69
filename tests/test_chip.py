import pytest

from spaced.addressing import AddressingMode
from spaced.chip import (
    MEMORY_SIZE,
    RESET_VECTOR,
    STACK_BOTTOM,
    Chip,
    ChipError,
    Flag,
    MemoryAccess,
)


@pytest.fixture
def chip():
    return Chip(bytearray(MEMORY_SIZE), 0)


def test_initial_state(chip):
    assert chip.sp == 0xFF
    assert chip.pc == 0
    assert chip.sr == 0
    assert chip.halted is False


def test_default_memory_size():
    assert len(Chip().memory) == MEMORY_SIZE


def test_dump_format(chip):
    assert chip.dump() == "PC=0x0000 AC=0x00 X=0x00 Y=0x00 SR=0x00 SP=0xFF"


def test_load_rom_copies_and_sets_pc(chip):
    start = 0xF800
    rom = bytearray(MEMORY_SIZE - start)
    rom[RESET_VECTOR - start] = start & 0xFF
    rom[RESET_VECTOR - start + 1] = start >> 8
    rom[0] = 0xEA
    chip.load_rom(bytes(rom), start)
    assert chip.memory[start:] == rom
    assert chip.pc == start


def test_load_rom_too_large(chip):
    with pytest.raises(ChipError):
        chip.load_rom(bytes(0x900), 0xF800)


def test_callbacks_newest_first(chip):
    order = []

    def first(access, address, value):
        order.append("first")
        return value + 1

    def second(access, address, value):
        order.append("second")
        return value * 2

    chip.memory[0x10] = 3
    chip.add_memory_callback(first)
    chip.add_memory_callback(second)
    assert chip.read_direct(0x10) == 7
    assert order == ["second", "first"]


def test_read_callback_can_replace_value(chip):
    chip.memory[0x20] = 0x01
    chip.add_memory_callback(lambda access, address, value: 0x42)
    assert chip.read_direct(0x20) == 0x42
    assert chip.memory[0x20] == 0x01


def test_write_callback_transforms_stored_value(chip):
    seen = []

    def hook(access, address, value):
        seen.append((access, address, value))
        return 0x42

    chip.add_memory_callback(hook)
    chip.write_direct(0x300, 0x07)
    assert chip.memory[0x300] == 0x42
    assert seen == [(MemoryAccess.WRITE, 0x300, 0x07)]


def test_read_callback_reports_read(chip):
    seen = []
    chip.add_memory_callback(lambda a, addr, v: seen.append(a) or v)
    chip.read_direct(0x55)
    assert seen == [MemoryAccess.READ]


def test_pc_inc_reads_and_advances(chip):
    chip.memory[0x0400] = 0xAB
    chip.pc = 0x0400
    assert chip.pc_inc() == 0xAB
    assert chip.pc == 0x0401


def test_pc_inc_wraps(chip):
    chip.pc = 0xFFFF
    chip.pc_inc()
    assert chip.pc == 0


def test_immediate_read(chip):
    chip.pc = 0x200
    chip.memory[0x200] = 0x7E
    assert chip.read_word(AddressingMode.IMMEDIATE) == 0x7E
    assert chip.pc == 0x201
    chip.pc = 0x200
    assert chip.read_addr(AddressingMode.IMMEDIATE) == 0x200


def test_absolute_and_indexed_read(chip):
    target = 0x1234
    chip.pc = 0x300
    chip.memory[0x300] = target & 0xFF
    chip.memory[0x301] = target >> 8
    chip.memory[target] = 0x99
    assert chip.read_word(AddressingMode.ABSOLUTE) == 0x99
    assert chip.pc == 0x303 - 1

    chip.pc = 0x300
    chip.x = 5
    assert chip.read_addr(AddressingMode.ABSOLUTE_X) == target + 5
    chip.pc = 0x300
    chip.y = 9
    assert chip.read_addr(AddressingMode.ABSOLUTE_Y) == target + 9


def test_dword_high_byte_comes_from_zero_page(chip):
    target = 0x1234
    chip.pc = 0x300
    chip.memory[0x300] = target & 0xFF
    chip.memory[0x301] = target >> 8
    chip.memory[(target + 1) & 0xFF] = 0xAA
    chip.memory[target + 1] = 0xBB
    assert chip.read_dword(AddressingMode.ABSOLUTE) >> 8 == 0xAA


def test_zero_page_read(chip):
    chip.pc = 0x500
    chip.memory[0x500] = 0x33
    chip.memory[0x33] = 0x5A
    assert chip.read_word(AddressingMode.ZERO_PAGE) == 0x5A


def test_indirect_y_read(chip):
    base = 0x3000
    chip.pc = 0x200
    chip.memory[0x200] = 0x40
    chip.memory[0x40] = base & 0xFF
    chip.memory[0x41] = base >> 8
    chip.y = 4
    assert chip.read_addr(AddressingMode.INDIRECT_Y) == base + chip.y


@pytest.mark.parametrize("mode", [AddressingMode.ACCUMULATOR, AddressingMode.IMPLIED])
def test_unsupported_read_modes(chip, mode):
    with pytest.raises(ChipError):
        chip.perform_read(mode)


@pytest.mark.parametrize(
    "mode",
    [AddressingMode.ACCUMULATOR, AddressingMode.IMMEDIATE, AddressingMode.ABSOLUTE_Y],
)
def test_unsupported_write_modes(chip, mode):
    with pytest.raises(ChipError):
        chip.perform_write(mode, 1)


def test_write_zero_page_y_wraps(chip):
    chip.pc = 0x200
    chip.memory[0x200] = 0xF0
    chip.y = 0x20
    address = chip.perform_write(AddressingMode.ZERO_PAGE_Y, 0x77)
    assert address == 0x10
    assert chip.memory[address] == 0x77


def test_write_absolute_round_trip(chip):
    target = 0x2345
    chip.pc = 0x200
    chip.memory[0x200] = target & 0xFF
    chip.memory[0x201] = target >> 8
    assert chip.perform_write(AddressingMode.ABSOLUTE, 0x3C) == target
    chip.pc = 0x200
    assert chip.read_word(AddressingMode.ABSOLUTE) == 0x3C


def test_perform_write_bypasses_write_callbacks(chip):
    writes = []

    def hook(access, address, value):
        if access is MemoryAccess.WRITE:
            writes.append(address)
        return value

    chip.add_memory_callback(hook)
    chip.pc = 0x200
    chip.memory[0x200] = 0x44
    chip.perform_write(AddressingMode.ZERO_PAGE, 0x12)
    assert writes == []
    assert chip.memory[0x44] == 0x12


def test_stack_round_trip(chip):
    for value in (1, 2, 3):
        chip.stack_push(value)
    assert [chip.stack_pull() for _ in range(3)] == [3, 2, 1]
    assert chip.sp == 0xFF


def test_stack_push_location(chip):
    chip.stack_push(0x5D)
    assert chip.memory[STACK_BOTTOM + 0xFF] == 0x5D


def test_stack_underflow(chip):
    with pytest.raises(ChipError):
        chip.stack_pull()


def test_stack_overflow(chip):
    chip.sp = 0x00
    with pytest.raises(ChipError):
        chip.stack_push(1)


@pytest.mark.parametrize("flag", list(Flag))
def test_flag_round_trip_is_isolated(chip, flag):
    chip.sr = 0
    chip.set_flag(flag, 5)
    assert chip.get_flag(flag) == 1
    assert chip.sr == flag.mask
    chip.sr = 0xFF
    chip.set_flag(flag, 0)
    assert chip.get_flag(flag) == 0
    assert chip.sr == 0xFF & ~flag.mask


def test_flag_masks(chip):
    chip.set_flag(Flag.CARRY, 1)
    assert chip.sr == 0b00000001
    chip.sr = 0
    chip.set_flag(Flag.NEGATIVE, 1)
    assert chip.sr == 0b10000000


def test_update_zero_negative(chip):
    chip.update_zero_negative(0)
    assert (chip.get_flag(Flag.ZERO), chip.get_flag(Flag.NEGATIVE)) == (1, 0)
    chip.update_zero_negative(0x80)
    assert (chip.get_flag(Flag.ZERO), chip.get_flag(Flag.NEGATIVE)) == (0, 1)
    chip.update_zero_negative(0x100)
    assert chip.get_flag(Flag.ZERO) == 1


def test_update_carry_and_overflow(chip):
    chip.update_carry(True)
    chip.update_overflow(0x40)
    assert chip.get_flag(Flag.CARRY) == 1
    assert chip.get_flag(Flag.OVERFLOW) == 1
    chip.update_carry(0)
    chip.update_overflow(False)
    assert chip.sr == 0