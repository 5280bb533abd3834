import io

import pytest

from splcomp.errors import CompilerError
from splcomp.instruction import (
    CompInstr,
    Func0,
    Func1,
    ImmedInstr,
    InstrType,
    JumpInstr,
    OpCode,
    OtherCompInstr,
    SyscallInstr,
    SyscallType,
    UImmedInstr,
    assembly_form,
    decode,
    instruction_type,
    mnemonic,
    print_instruction,
    print_table_heading,
    read_instruction,
    syscall_mnemonic,
    write_instruction,
)
from splcomp.machine_types import form_address
from splcomp.regname import register_name

SAMPLES = [
    CompInstr(Func0.ADD, 1, 3, 2, -2),
    CompInstr(Func0.NOP),
    CompInstr(Func0.SWR, 7, -256, 3, 255),
    OtherCompInstr(Func1.LIT, 4, -10, 2047),
    OtherCompInstr(Func1.JREL, 0, 0, -2048),
    SyscallInstr(SyscallType.PRINT_INT, 3, 5),
    SyscallInstr(SyscallType.STOP_TRACING),
    ImmedInstr(OpCode.ADDI, 1, 0, -5),
    ImmedInstr(OpCode.BNE, 2, 4, 32767),
    UImmedInstr(OpCode.XORI, 5, 1, 0xFFFF),
    JumpInstr(OpCode.CALL, 0xFFFFFFF),
    JumpInstr(OpCode.RTN),
]


@pytest.mark.parametrize("instr", SAMPLES)
def test_encode_decode_round_trip(instr):
    word = instr.to_word()
    assert 0 <= word <= 0xFFFFFFFF
    assert word & 0xF == instr.op
    assert decode(word) == instr


@pytest.mark.parametrize("instr", SAMPLES)
def test_binary_stream_round_trip(instr):
    buf = io.BytesIO()
    write_instruction(buf, instr)
    assert len(buf.getvalue()) == 4
    buf.seek(0)
    assert read_instruction(buf) == instr


def test_read_several_instructions_in_order():
    buf = io.BytesIO()
    for instr in SAMPLES:
        write_instruction(buf, instr)
    buf.seek(0)
    assert [read_instruction(buf) for _ in SAMPLES] == SAMPLES
    with pytest.raises(CompilerError):
        read_instruction(buf)


@pytest.mark.parametrize("data", [b"", b"\x01\x02\x03"])
def test_short_read_raises(data):
    with pytest.raises(CompilerError):
        read_instruction(io.BytesIO(data))


def test_write_rejects_non_instruction():
    with pytest.raises(TypeError):
        write_instruction(io.BytesIO(), "ADD")


@pytest.mark.parametrize(
    "instr, expected",
    [
        (CompInstr(Func0.SUB), InstrType.COMP),
        (OtherCompInstr(Func1.MUL), InstrType.OTHER_COMP),
        (SyscallInstr(SyscallType.EXIT), InstrType.SYSCALL),
        (ImmedInstr(OpCode.BEQ), InstrType.IMMED),
        (UImmedInstr(OpCode.ANDI), InstrType.IMMED),
        (JumpInstr(OpCode.JMPA), InstrType.JUMP),
        (object(), InstrType.ERROR),
    ],
)
def test_instruction_type(instr, expected):
    assert instruction_type(instr) is expected


def test_decode_gives_unsigned_class_for_logical_immediates():
    word = UImmedInstr(OpCode.ANDI, 0, 0, 0x8000).to_word()
    assert isinstance(decode(word), UImmedInstr)
    word = ImmedInstr(OpCode.ADDI, 0, 0, -1).to_word()
    assert decode(word).immed == -1


@pytest.mark.parametrize(
    "word",
    [
        14 << 28,  # computational function code with no instruction
        OpCode.OTHC,  # other computational with function code 0
        OpCode.OTHC | (15 << 28),  # system call with code 0
    ],
)
def test_decode_rejects_unknown_codes(word):
    with pytest.raises(CompilerError):
        decode(word)


def test_constructors_validate_codes():
    with pytest.raises(ValueError):
        OtherCompInstr(Func1.SYS)
    with pytest.raises(ValueError):
        ImmedInstr(OpCode.JMPA)
    with pytest.raises(ValueError):
        JumpInstr(OpCode.ADDI)
    with pytest.raises(ValueError):
        SyscallInstr(99)


@pytest.mark.parametrize(
    "instr, name",
    [
        (CompInstr(Func0.ADD), "ADD"),
        (CompInstr(Func0.NEG), "NEG"),
        (OtherCompInstr(Func1.JREL), "JREL"),
        (OtherCompInstr(Func1.CFHI), "CFHI"),
        (SyscallInstr(SyscallType.EXIT), "EXIT"),
        (SyscallInstr(SyscallType.READ_CHAR), "RCH"),
        (ImmedInstr(OpCode.BEQ), "BEQ"),
        (UImmedInstr(OpCode.NORI), "NORI"),
        (JumpInstr(OpCode.CALL), "CALL"),
    ],
)
def test_mnemonic(instr, name):
    assert mnemonic(instr) == name


def test_syscall_mnemonic():
    assert syscall_mnemonic(SyscallType.START_TRACING) == "STRA"
    assert syscall_mnemonic(SyscallType.PRINT_STR) == "PSTR"
    with pytest.raises(CompilerError):
        syscall_mnemonic(9999)


def test_assembly_form_without_arguments():
    assert assembly_form(0, CompInstr(Func0.NOP)) == "NOP "
    assert assembly_form(0, JumpInstr(OpCode.RTN)) == "RTN "
    assert assembly_form(0, SyscallInstr(SyscallType.STOP_TRACING)) == "NOTR "


def test_assembly_form_computational_fields():
    form = assembly_form(0, CompInstr(Func0.ADD, 1, 3, 2, -2))
    name, args = form.split(" ", 1)
    assert name == "ADD"
    assert args.split(", ") == [register_name(1), "3", register_name(2), "-2"]

    args = assembly_form(0, CompInstr(Func0.LWR, 4, 9, 5, 6)).split(" ", 1)[1]
    assert args.split(", ") == [register_name(4), register_name(5), "6"]

    args = assembly_form(0, CompInstr(Func0.CPR, 6, 1, 3, 1)).split(" ", 1)[1]
    assert args.split(", ") == [register_name(6), register_name(3)]


def test_assembly_form_branch_comment_uses_target_address():
    instr = ImmedInstr(OpCode.BEQ, 1, 0, -3)
    form = assembly_form(10, instr)
    assert form.startswith("BEQ ")
    assert form.endswith(f"# target is word address {form_address(10, 7)}")
    assert "\t" in form


def test_assembly_form_jump_target():
    form = assembly_form(100, JumpInstr(OpCode.JMPA, 42))
    assert form.startswith("JMPA 42\t")
    assert form.endswith(f"# target is word address {form_address(100, 42)}")


def test_assembly_form_jrel_target():
    form = assembly_form(20, OtherCompInstr(Func1.JREL, 0, 0, 5))
    assert form.startswith("JREL 5\t")
    assert form.endswith(f"# target is word address {form_address(20, 25)}")


def test_assembly_form_logical_immediate_in_hex():
    form = assembly_form(0, UImmedInstr(OpCode.ANDI, 2, 1, 0xFF))
    assert form.endswith(", 0xff")


def test_assembly_form_shift_prints_unsigned():
    form = assembly_form(0, OtherCompInstr(Func1.SLL, 3, 0, -1))
    assert form.endswith(", 65535")


def test_assembly_form_exit_prints_offset():
    form = assembly_form(0, SyscallInstr(SyscallType.EXIT, 0, 7))
    assert form.split(" ", 1) == ["EXIT", "7"]


def test_print_table_heading():
    out = io.StringIO()
    print_table_heading(out)
    assert out.getvalue() == "Address Instruction\n"


def test_print_instruction_line():
    out = io.StringIO()
    instr = ImmedInstr(OpCode.ADDI, 1, 2, 3)
    print_instruction(out, 7, instr)
    line = out.getvalue()
    assert line.endswith(": " + assembly_form(7, instr) + "\n")
    address_part = line.split(":")[0]
    assert len(address_part) == 8
    assert address_part.strip() == "7"