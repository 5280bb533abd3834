"""Word sizes, field limits and address arithmetic of the stack machine."""

from __future__ import annotations

from .errors import CompilerError

BYTES_PER_WORD = 4

NINE_BITS_MAX_SIGNED = 0xFF
NINE_BITS_MIN_SIGNED = -512
TWELVE_BITS_MAX_SIGNED = 0x7FF
TWELVE_BITS_MIN_SIGNED = -0x800
TWELVE_BITS_MAX_UNSIGNED = 0xFFF
SIXTEEN_BITS_MAX_SIGNED = 0o777
SIXTEEN_BITS_MIN_SIGNED = -0o1000
SIXTEEN_BITS_MAX_UNSIGNED = 0xFFFF
TWENTY_EIGHT_BITS_MAX_UNSIGNED = 0xFFFFFFF

_WORD_MASK = 0xFFFFFFFF


def _to_signed_word(value: int) -> int:
    value &= _WORD_MASK
    return value - (1 << 32) if value & 0x80000000 else value


def sgn_ext(i: int) -> int:
    """Return the sign-extended (signed 32-bit) equivalent of i."""
    return _to_signed_word(i)


def zero_ext(i: int) -> int:
    """Return the zero-extended (unsigned 32-bit) equivalent of i."""
    return i & _WORD_MASK


def form_offset(o: int) -> int:
    """Return the offset given by o, which is its sign extension."""
    return sgn_ext(o)


def form_address(pc: int, a: int) -> int:
    """Combine the high-order 4 bits of pc with the low bits of address a."""
    return (0xF0000000 & pc) | (0x0FFFFFF & a)


def check_fits_in_offset(o: int) -> None:
    """Raise CompilerError unless o fits in an offset field."""
    if o > NINE_BITS_MAX_SIGNED:
        raise CompilerError(f"Offset is too large: {o}")
    if o < NINE_BITS_MIN_SIGNED:
        raise CompilerError(f"Offset is too small: {o}")


def check_fits_in_arg(arg: int) -> None:
    """Raise CompilerError unless arg fits in a 12-bit argument field."""
    if arg > TWELVE_BITS_MAX_SIGNED:
        raise CompilerError(f"12 bit argument is too large: {arg}")
    if arg < TWELVE_BITS_MIN_SIGNED:
        raise CompilerError(f"12 bit argument is too small: {arg}")


def check_fits_in_shift(s: int) -> None:
    """Raise CompilerError unless s fits in a shift field."""
    if s > TWELVE_BITS_MAX_UNSIGNED:
        raise CompilerError(f"Shift is too large: {zero_ext(s)}")


def check_fits_in_immed(immed: int) -> None:
    """Raise CompilerError unless immed fits in a signed immediate field."""
    if immed > SIXTEEN_BITS_MAX_SIGNED:
        raise CompilerError(f"Immediate argument is too large: {immed}")
    if immed < SIXTEEN_BITS_MIN_SIGNED:
        raise CompilerError(f"Immediate argument is too small: {immed}")


def check_fits_in_uimmed(arg: int) -> None:
    """Raise CompilerError unless arg fits in an unsigned immediate field."""
    if arg > SIXTEEN_BITS_MAX_UNSIGNED:
        raise CompilerError(
            f"Unsigned immediate argument is too large: {zero_ext(arg)}"
        )


def check_fits_in_addr(addr: int) -> None:
    """Raise CompilerError unless addr fits in a 28-bit address field."""
    unsigned = zero_ext(addr)
    if unsigned > TWENTY_EIGHT_BITS_MAX_UNSIGNED:
        raise CompilerError(f"Address is too large: {unsigned}")


def round_up_to_wordsize(n: int) -> int:
    """Return the smallest multiple of BYTES_PER_WORD that is at least n."""
    rem = n % BYTES_PER_WORD
    return n if rem == 0 else n + (BYTES_PER_WORD - rem)