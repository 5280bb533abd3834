"""Symbolic names of the machine's registers."""

from __future__ import annotations

NUM_REGISTERS = 8

GP = 0
SP = 1
FP = 2
RA = 7

REGISTER_NAMES = ("$gp", "$sp", "$fp", "$r3", "$r4", "$r5", "$r6", "$ra")


def register_name(n: int) -> str:
    """Return the standard symbolic name of register number n."""
    if not 0 <= n < NUM_REGISTERS:
        raise ValueError(f"Bad register number ({n})!")
    return REGISTER_NAMES[n]