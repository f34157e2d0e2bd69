# spaced

`spaced` holds two independent pieces:

- a model of the 6502 processor: its memory, registers and stack
  (`spaced.chip`), its addressing modes (`spaced.addressing`) and its
  instructions (`spaced.ops`);
- a collision test for convex polygons based on the separating axis theorem
  (`spaced.sat`), built on a plain 2D vector type (`spaced.vec2`).

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the test suite, install the test extra and run pytest:

```
pip install .[test]
pytest
```

## Vectors and collisions

```python
from spaced.vec2 import Vec2
from spaced.sat import intersect

square = [Vec2(0, 0), Vec2(2, 0), Vec2(2, 2), Vec2(0, 2)]
shifted = [Vec2(1, 1), Vec2(3, 1), Vec2(3, 3), Vec2(1, 3)]

push = intersect(square, shifted)   # a Vec2, or None when separated
```

`Vec2` is an immutable dataclass with `x` and `y`. It supports subtraction
(`a - b`), scaling (`v * 2.0` or `2.0 * v`), `dot`, `perpendicular` (a quarter
turn counter-clockwise) and `normalized`. A vector shorter than `1e-7`
normalizes to the zero vector.

`intersect(first, second)` takes two convex polygons as sequences of vertices
in order. It returns `None` when some edge normal separates them. Otherwise it
returns the edge normal with the smallest overlap, scaled by that overlap.
Polygons that only touch count as separated. It is built from two steps that
are also public:

- `project(vertices, axis)` gives the `(low, high)` interval of the vertices
  projected onto an axis;
- `is_overlap(a, b)` tells whether two such intervals overlap strictly.

## The 6502 chip

`Chip` in `spaced.chip` holds a 64 KiB memory and the registers `pc`, `ac`,
`x`, `y`, `sr` and `sp`. `sp` starts at `0xFF`. It also has `quota` and
`halted` attributes, which nothing in the package changes.

```python
from spaced.chip import Chip, Flag

rom = bytes(0x800)
chip = Chip(bytearray(0x10000), 0)
chip.load_rom(rom, 0xF800)   # pc is then taken from the reset vector at 0xFFFC
print(chip.dump())           # PC=0x0000 AC=0x00 X=0x00 Y=0x00 SR=0x00 SP=0xFF
chip.set_flag(Flag.CARRY, 1)
```

Memory access:

- `read_direct` and `write_direct` pass each byte through the memory
  callbacks. A callback is called as `callback(access, address, value)`, where
  `access` is a `MemoryAccess` (`READ` or `WRITE`), and it returns the byte to
  use. Callbacks are registered with `add_memory_callback`, and the newest one
  runs first.
- `pc_inc` reads the byte at `pc` and advances `pc`.
- `perform_read(mode)` resolves an operand for an `AddressingMode` and returns
  `(address, value)`, where `value` is 16 bits read from the address.
  `read_addr`, `read_word` and `read_dword` return the address, the low byte
  and the 16-bit value.
- `perform_write(mode, value)` stores a byte at the operand address, writing
  memory directly without the callbacks, and returns the address.

The stack lives at `0x0100`–`0x01FF` (`stack_push`, `stack_pull`). Status
flags are read and written with `get_flag` and `set_flag`, using `Flag`;
`Flag.mask` gives a flag's bit mask. `update_carry`, `update_zero_negative`
and `update_overflow` set flags from a result.

The following raise `ChipError`:

- loading a ROM that does not fit in memory;
- pushing to a full stack;
- pulling from an empty stack;
- using an addressing mode that an access does not support, including
  `ACCUMULATOR`, which only the shift and rotate instructions accept.

### Instructions

`Cpu` in `spaced.ops` is a `Chip` with one method per instruction: loads and
stores (`lda`, `ldx`, `ldy`, `sta`, `stx`, `sty`), transfers (`tax`, `tay`,
`txa`, `tya`, `tsx`, `txs`), arithmetic and logic (`adc`, `sbc`, `and_`,
`ora`, `eor`, `cmp`, `cpx`, `cpy`), increments and decrements (`inc`, `dec`,
`inx`, `iny`, `dex`, `dey`), shifts and rotations (`asl`, `lsr`, `rol`,
`ror`), branches (`beq`, `bne`, `bmi`, `bpl`, `bcs`, `bcc`, `bvs`, `bvc`),
jumps (`jmp`, `jsr`, `rts`, `brk`), stack (`pha`, `pla`), flags (`sec`,
`sei`, `sed`, `clc`, `cli`, `cld`, `clv`) and `nop`. `and` is spelled `and_`.

Each method runs one instruction whose opcode has already been read, so `pc`
must point at its first operand byte. Methods that take a `mode` are given an
`AddressingMode`.

```python
from spaced.addressing import AddressingMode
from spaced.ops import Cpu

cpu = Cpu()
cpu.memory[0:2] = bytes([0x05, 0x03])
cpu.lda(AddressingMode.IMMEDIATE)   # ac = 0x05
cpu.clc()
cpu.adc(AddressingMode.IMMEDIATE)   # ac = 0x08
```

## What it does not do

The package does not decode opcodes. There is no table from opcode bytes to
instructions, no fetch-and-execute step and no run loop. A caller chooses which
`Cpu` method to call. There is no command-line program for loading and running
a ROM image.