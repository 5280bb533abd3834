# splcomp

Building blocks for a compiler of the small SPL language that targets a
simplified stack machine (SSM). Everything is a plain library; there is no
command to run.

## Modules

- `splcomp.errors`: `CompilerError`, raised whenever work cannot continue;
  `ProgramError`, a `CompilerError` that carries a `FileLocation`
  (`filename`, `line`) and renders as `"file: line N message"`; and two small
  helpers, `debug_print(message)` (flushes standard output, writes to
  standard error) and `newline(out)`.
- `splcomp.machine_types`: word helpers (`sgn_ext`, `zero_ext`,
  `form_offset`), `form_address(pc, a)` (high 4 bits of `pc` combined with
  the low bits of `a`), `round_up_to_wordsize(n)`, and range checks for
  instruction fields (`check_fits_in_offset`, `check_fits_in_arg`,
  `check_fits_in_shift`, `check_fits_in_immed`, `check_fits_in_uimmed`,
  `check_fits_in_addr`), each raising `CompilerError` when the value does not
  fit. `BYTES_PER_WORD` is 4.
- `splcomp.regname`: `register_name(n)` gives the symbolic name of register
  `n` (`"$gp"`, `"$sp"`, `"$fp"`, `"$r3"` … `"$r6"`, `"$ra"`) and raises
  `ValueError` outside 0–7.
- `splcomp.lexical_address`: `LexicalAddress(levels_outward, offset_in_ar)`,
  shown as `(levels,offset)`.
- `splcomp.instruction`: the instruction formats `CompInstr`,
  `OtherCompInstr`, `SyscallInstr`, `ImmedInstr`, `UImmedInstr` and
  `JumpInstr`, with the code enums `OpCode`, `Func0`, `Func1`,
  `SyscallType` and `InstrType`.
  - `to_word()` encodes an instruction as a 32-bit word; `decode(word)`
    turns a word back into an instruction (raising `CompilerError` for codes
    it does not know).
  - `write_instruction(stream, instr)` and `read_instruction(stream)` move
    single instructions to and from a binary stream as 4 little-endian bytes;
    reading past the end raises `CompilerError`.
  - `instruction_type(instr)`, `mnemonic(instr)`, `syscall_mnemonic(code)`
    and `assembly_form(addr, instr)` give the assembly-language view; branch,
    `JREL`, `JMPA` and `CALL` forms include a `# target is word address N`
    comment.
  - `print_table_heading(out)` and `print_instruction(out, addr, instr)`
    write a disassembly listing.
- `splcomp.literal_table`: `LiteralTable` gives each distinct literal text a
  word offset in insertion order. `find_or_add(text, value)` returns the
  offset, adding the entry if needed; `search_offset(text)` returns the
  offset or `None`; `len()`, `in`, `is_empty()` and iteration over the stored
  values are supported.
- `splcomp.scope`: `Scope`, `IdAttrs` and `IdKind` (`CONSTANT`, `VARIABLE`,
  `PROCEDURE`). Inserting a constant or variable stores the scope's current
  location count in its `offset_count` and increases the count; procedures do
  not take a location. A scope holds at most 4096 names.
- `splcomp.symtab`: `SymbolTable`, a stack of scopes (at most 100 deep).
  `enter_scope()` and `leave_scope()` push and pop; `insert(name, attrs)`
  raises `ProgramError` if the name is already declared in the current
  scope; `lookup(name)` searches outward and returns an `IdUse` with the
  attributes and the number of levels outward, or `None`.

## Example

```python
import io
from splcomp.instruction import (
    ImmedInstr, OpCode, assembly_form, read_instruction, write_instruction,
)
from splcomp.literal_table import LiteralTable

table = LiteralTable()
table.find_or_add("7", 7)
table.find_or_add("42", 42)
print(list(table))              # [7, 42]

buf = io.BytesIO()
write_instruction(buf, ImmedInstr(OpCode.ADDI, 1, 0, -4))
buf.seek(0)
print(assembly_form(0, read_instruction(buf)))   # ADDI $sp, 0, -4
```

## What this package does not do

It has no lexer, parser, scope checker over a syntax tree, code generator,
assembler or virtual machine, and no command-line compiler. It provides the
machine-level types, instruction encoding and listing, and the literal and
symbol tables that such tools are built on.

## Installation and tests

```
pip install .
pip install .[test]
pytest
```