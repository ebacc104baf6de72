"""6502 assembly for `asm` literals.

Implements the subset needed to turn an inline listing into bytes:
  - Full NMOS 6502 instruction set (official opcodes)
  - MADS-style operands: #imm, (zp),Y, (zp,X), (abs), addr,X, addr,Y, A
  - Operands are ratcalc expressions; $FF and %1010 are also accepted
  - Branch operands are absolute targets

Statements are separated by ``;`` or newlines. There are no labels,
directives or comments.

Usage as library:
    from ratcalc.asm import assemble
    assemble('lda #$41; sta $d01a; rts')    # b'\\xa9A\\x8d\\x1a\\xd0`'
"""

import re

from .encoder import encode, EncodeError
from .opcodes import ALL_MNEMONICS


_RE_SPLIT = re.compile(r'[;\n]')


def split_statements(text):
    """Split a listing into ``(mnemonic, operand)`` pairs, skipping blanks."""
    out = []
    for stmt in _RE_SPLIT.split(text):
        stmt = stmt.strip()
        if not stmt:
            continue
        parts = stmt.split(None, 1)
        out.append((parts[0].lower(), parts[1].strip() if len(parts) > 1 else ''))
    return out


def assemble(text, org=0):
    """Assemble a listing starting at address *org*.

    Returns:
        bytes: machine code.

    Raises:
        EncodeError on unknown instructions, bad operands or branches
        out of range.
    """
    code = bytearray()
    pc = org
    for mnemonic, operand in split_statements(text):
        try:
            chunk = encode(mnemonic, operand, pc)
        except EncodeError as e:
            raise EncodeError(f"${pc:04X}: {e}") from e
        code.extend(chunk)
        pc += len(chunk)
    return bytes(code)


__all__ = ['assemble', 'encode', 'split_statements', 'EncodeError',
           'ALL_MNEMONICS']
