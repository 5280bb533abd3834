"""Binary instructions of the stack machine: encoding, decoding, disassembly."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import BinaryIO, TextIO, Union

from .errors import CompilerError
from .machine_types import BYTES_PER_WORD, form_address
from .regname import register_name

_WORD_MASK = 0xFFFFFFFF


class OpCode(enum.IntEnum):
    """Operation codes held in the low four bits of every instruction."""

    COMP = 0
    OTHC = 1
    ADDI = 2
    ANDI = 3
    BORI = 4
    NORI = 5
    XORI = 6
    BEQ = 7
    BGEZ = 8
    BGTZ = 9
    BLEZ = 10
    BLTZ = 11
    BNE = 12
    JMPA = 13
    CALL = 14
    RTN = 15


class Func0(enum.IntEnum):
    """Function codes of computational instructions (opcode COMP)."""

    NOP = 0
    ADD = 1
    SUB = 2
    CPW = 3
    CPR = 4
    AND = 5
    BOR = 6
    NOR = 7
    XOR = 8
    LWR = 9
    SWR = 10
    SCA = 11
    LWI = 12
    NEG = 13


class Func1(enum.IntEnum):
    """Function codes of other computational instructions (opcode OTHC)."""

    LIT = 1
    ARI = 2
    SRI = 3
    MUL = 4
    DIV = 5
    CFHI = 6
    CFLO = 7
    SLL = 8
    SRL = 9
    JMP = 10
    CSI = 11
    JREL = 12
    SYS = 15


class InstrType(enum.Enum):
    """The binary formats an instruction can have."""

    COMP = "comp"
    OTHER_COMP = "other_comp"
    IMMED = "immed"
    JUMP = "jump"
    SYSCALL = "syscall"
    ERROR = "error"


class SyscallType(enum.IntEnum):
    """System call codes."""

    EXIT = 1
    PRINT_STR = 2
    PRINT_INT = 3
    PRINT_CHAR = 4
    READ_CHAR = 5
    START_TRACING = 2046
    STOP_TRACING = 2047


_SYSCALL_MNEMONICS = {
    SyscallType.EXIT: "EXIT",
    SyscallType.PRINT_STR: "PSTR",
    SyscallType.PRINT_INT: "PINT",
    SyscallType.PRINT_CHAR: "PCH",
    SyscallType.READ_CHAR: "RCH",
    SyscallType.START_TRACING: "STRA",
    SyscallType.STOP_TRACING: "NOTR",
}

_IMMED_OPS = frozenset(OpCode(v) for v in range(OpCode.ADDI, OpCode.BNE + 1))
_UNSIGNED_IMMED_OPS = frozenset(
    {OpCode.ANDI, OpCode.BORI, OpCode.NORI, OpCode.XORI}
)
_BRANCH_OPS = frozenset(
    {OpCode.BEQ, OpCode.BGEZ, OpCode.BGTZ, OpCode.BLEZ, OpCode.BLTZ, OpCode.BNE}
)
_JUMP_OPS = frozenset({OpCode.JMPA, OpCode.CALL, OpCode.RTN})


def _signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value & (1 << (bits - 1)) else value


def _reg_off(reg: int, offset: int) -> int:
    return ((reg & 0x7) << 4) | ((offset & 0x1FF) << 7)


def _target_comment(pc: int, target: int) -> str:
    return f"# target is word address {form_address(pc, target) & _WORD_MASK}"


@dataclass(frozen=True)
class CompInstr:
    """A computational instruction: two register/offset pairs and a function."""

    func: Func0
    rt: int = 0
    ot: int = 0
    rs: int = 0
    os: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "func", Func0(self.func))

    @property
    def op(self) -> OpCode:
        return OpCode.COMP

    def to_word(self) -> int:
        """Return the 32-bit encoding; fields are truncated to their widths."""
        return (
            OpCode.COMP
            | _reg_off(self.rt, self.ot)
            | ((self.rs & 0x7) << 16)
            | ((self.os & 0x1FF) << 19)
            | ((self.func & 0xF) << 28)
        )


@dataclass(frozen=True)
class OtherCompInstr:
    """An other computational instruction (not a system call)."""

    func: Func1
    reg: int = 0
    offset: int = 0
    arg: int = 0

    def __post_init__(self) -> None:
        func = Func1(self.func)
        if func is Func1.SYS:
            raise ValueError("system calls are encoded with SyscallInstr")
        object.__setattr__(self, "func", func)

    @property
    def op(self) -> OpCode:
        return OpCode.OTHC

    def to_word(self) -> int:
        """Return the 32-bit encoding; fields are truncated to their widths."""
        return (
            OpCode.OTHC
            | _reg_off(self.reg, self.offset)
            | ((self.arg & 0xFFF) << 16)
            | ((self.func & 0xF) << 28)
        )


@dataclass(frozen=True)
class SyscallInstr:
    """A system call instruction."""

    code: SyscallType
    reg: int = 0
    offset: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", SyscallType(self.code))

    @property
    def op(self) -> OpCode:
        return OpCode.OTHC

    @property
    def func(self) -> Func1:
        return Func1.SYS

    def to_word(self) -> int:
        """Return the 32-bit encoding; fields are truncated to their widths."""
        return (
            OpCode.OTHC
            | _reg_off(self.reg, self.offset)
            | ((self.code & 0xFFF) << 16)
            | (Func1.SYS << 28)
        )


@dataclass(frozen=True)
class ImmedInstr:
    """An immediate instruction with a signed 16-bit operand."""

    op: OpCode
    reg: int = 0
    offset: int = 0
    immed: int = 0

    def __post_init__(self) -> None:
        op = OpCode(self.op)
        if op not in _IMMED_OPS:
            raise ValueError(f"{op.name} is not an immediate instruction")
        object.__setattr__(self, "op", op)

    def to_word(self) -> int:
        """Return the 32-bit encoding; fields are truncated to their widths."""
        return self.op | _reg_off(self.reg, self.offset) | ((self.immed & 0xFFFF) << 16)


@dataclass(frozen=True)
class UImmedInstr:
    """An immediate instruction with an unsigned 16-bit operand."""

    op: OpCode
    reg: int = 0
    offset: int = 0
    uimmed: int = 0

    def __post_init__(self) -> None:
        op = OpCode(self.op)
        if op not in _IMMED_OPS:
            raise ValueError(f"{op.name} is not an immediate instruction")
        object.__setattr__(self, "op", op)

    def to_word(self) -> int:
        """Return the 32-bit encoding; fields are truncated to their widths."""
        return self.op | _reg_off(self.reg, self.offset) | ((self.uimmed & 0xFFFF) << 16)


@dataclass(frozen=True)
class JumpInstr:
    """A jump instruction with a 28-bit address."""

    op: OpCode
    addr: int = 0

    def __post_init__(self) -> None:
        op = OpCode(self.op)
        if op not in _JUMP_OPS:
            raise ValueError(f"{op.name} is not a jump instruction")
        object.__setattr__(self, "op", op)

    def to_word(self) -> int:
        """Return the 32-bit encoding; the address is truncated to 28 bits."""
        return self.op | ((self.addr & 0xFFFFFFF) << 4)


Instruction = Union[
    CompInstr, OtherCompInstr, SyscallInstr, ImmedInstr, UImmedInstr, JumpInstr
]

_INSTRUCTION_CLASSES = (
    CompInstr,
    OtherCompInstr,
    SyscallInstr,
    ImmedInstr,
    UImmedInstr,
    JumpInstr,
)


def decode(word: int) -> Instruction:
    """Decode a 32-bit instruction word into an instruction object."""
    word &= _WORD_MASK
    op = OpCode(word & 0xF)
    reg = (word >> 4) & 0x7
    offset = _signed(word >> 7, 9)
    func = (word >> 28) & 0xF
    try:
        if op is OpCode.COMP:
            return CompInstr(
                func, reg, offset, (word >> 16) & 0x7, _signed(word >> 19, 9)
            )
        if op is OpCode.OTHC:
            if func == Func1.SYS:
                return SyscallInstr((word >> 16) & 0xFFF, reg, offset)
            return OtherCompInstr(func, reg, offset, _signed(word >> 16, 12))
        if op in _UNSIGNED_IMMED_OPS:
            return UImmedInstr(op, reg, offset, (word >> 16) & 0xFFFF)
        if op in _IMMED_OPS:
            return ImmedInstr(op, reg, offset, _signed(word >> 16, 16))
        return JumpInstr(op, word >> 4)
    except ValueError as exc:
        raise CompilerError(
            f"Cannot decode instruction word 0x{word:08x}: {exc}"
        ) from exc


def instruction_type(instr: object) -> InstrType:
    """Return the binary format of instr."""
    if isinstance(instr, CompInstr):
        return InstrType.COMP
    if isinstance(instr, OtherCompInstr):
        return InstrType.OTHER_COMP
    if isinstance(instr, SyscallInstr):
        return InstrType.SYSCALL
    if isinstance(instr, (ImmedInstr, UImmedInstr)):
        return InstrType.IMMED
    if isinstance(instr, JumpInstr):
        return InstrType.JUMP
    return InstrType.ERROR


def read_instruction(stream: BinaryIO) -> Instruction:
    """Read one binary instruction from stream."""
    data = stream.read(BYTES_PER_WORD)
    if len(data) != BYTES_PER_WORD:
        name = getattr(stream, "name", "<stream>")
        raise CompilerError(f"Cannot read instruction from {name} (read 0 instrs)")
    return decode(int.from_bytes(data, "little"))


def write_instruction(stream: BinaryIO, instr: Instruction) -> None:
    """Write instr to stream in binary."""
    if instruction_type(instr) is InstrType.ERROR:
        raise TypeError(f"Not an instruction: {instr!r}")
    stream.write(instr.to_word().to_bytes(BYTES_PER_WORD, "little"))


def syscall_mnemonic(code: int) -> str:
    """Return the mnemonic of the system call with the given code."""
    try:
        return _SYSCALL_MNEMONICS[SyscallType(code)]
    except ValueError:
        raise CompilerError(
            f"Unknown code ({code}) in instruction_syscall_mnemonic"
        ) from None


def mnemonic(instr: Instruction) -> str:
    """Return the assembly language name of instr."""
    kind = instruction_type(instr)
    if kind is InstrType.SYSCALL:
        return syscall_mnemonic(instr.code)
    if kind in (InstrType.COMP, InstrType.OTHER_COMP):
        return instr.func.name
    if kind is InstrType.ERROR:
        raise CompilerError(f"Not an instruction: {instr!r}")
    return instr.op.name


def _comp_args(instr: CompInstr) -> str:
    rt, rs = register_name(instr.rt), register_name(instr.rs)
    if instr.func is Func0.NOP:
        return ""
    if instr.func is Func0.CPR:
        return f"{rt}, {rs}"
    if instr.func is Func0.LWR:
        return f"{rt}, {rs}, {instr.os}"
    if instr.func is Func0.SWR:
        return f"{rt}, {instr.ot}, {rs}"
    return f"{rt}, {instr.ot}, {rs}, {instr.os}"


def _other_comp_args(addr: int, instr: OtherCompInstr) -> str:
    func = instr.func
    if func is Func1.JREL:
        return f"{instr.arg}\t{_target_comment(addr, addr + instr.arg)}"
    reg = register_name(instr.reg)
    if func is Func1.LIT:
        return f"{reg}, {instr.offset}, {instr.arg}"
    if func in (Func1.ARI, Func1.SRI):
        return f"{reg}, {instr.arg}"
    if func in (Func1.SLL, Func1.SRL):
        return f"{reg}, {instr.offset}, {instr.arg & 0xFFFF}"
    return f"{reg}, {instr.offset}"


def _immed_args(addr: int, instr: Union[ImmedInstr, UImmedInstr]) -> str:
    raw = instr.uimmed if isinstance(instr, UImmedInstr) else instr.immed
    reg = register_name(instr.reg)
    if instr.op in _UNSIGNED_IMMED_OPS:
        return f"{reg}, {instr.offset}, 0x{raw & 0xFFFF:x}"
    value = _signed(raw, 16)
    if instr.op in _BRANCH_OPS:
        return (
            f"{reg}, {instr.offset}, {value}\t{_target_comment(addr, addr + value)}"
        )
    return f"{reg}, {instr.offset}, {value}"


def _syscall_args(instr: SyscallInstr) -> str:
    if instr.code is SyscallType.EXIT:
        return f"{instr.offset}"
    if instr.code in (SyscallType.START_TRACING, SyscallType.STOP_TRACING):
        return ""
    return f"{register_name(instr.reg)}, {instr.offset}"


def assembly_form(addr: int, instr: Instruction) -> str:
    """Return the assembly language form of instr, located at address addr."""
    kind = instruction_type(instr)
    if kind is InstrType.COMP:
        args = _comp_args(instr)
    elif kind is InstrType.OTHER_COMP:
        args = _other_comp_args(addr, instr)
    elif kind is InstrType.IMMED:
        args = _immed_args(addr, instr)
    elif kind is InstrType.JUMP:
        if instr.op is OpCode.RTN:
            args = ""
        else:
            target = instr.addr & 0xFFFFFFF
            args = f"{target}\t{_target_comment(addr, target)}"
    elif kind is InstrType.SYSCALL:
        args = _syscall_args(instr)
    else:
        raise CompilerError(
            f"Unknown instruction type ({instr!r}) in instruction_assembly_form!"
        )
    return f"{mnemonic(instr)} {args}"


def print_table_heading(out: TextIO) -> None:
    """Write the heading of an instruction listing to out."""
    out.write("Address Instruction\n")


def print_instruction(out: TextIO, addr: int, instr: Instruction) -> None:
    """Write addr, a colon and the assembly form of instr as one line to out."""
    out.write(f"{addr & _WORD_MASK:8d}: {assembly_form(addr, instr)}\n")