"""6502 instruction encoder.

Parses operand strings, detects addressing modes, and emits machine code.
Operand values are ratcalc expressions and must reduce to integers.
"""

import re

from ..errors import EvalError
from ..evaluator import evaluate
from .opcodes import OPCODES, BRANCHES, SHIFT_OPS, ALL_MNEMONICS


class EncodeError(Exception):
    pass


_RE_HEX = re.compile(r'\$([0-9A-Fa-f]+)')
_RE_BIN = re.compile(r'%([01]+)')


def operand_value(expr):
    """Evaluate an operand expression; ``$FF`` / ``%101`` are accepted."""
    text = _RE_BIN.sub(r'0b\1', _RE_HEX.sub(r'0x\1', expr))
    try:
        value = evaluate(text)
    except EvalError as e:
        raise EncodeError(f"Bad operand '{expr}': {e}") from e
    if isinstance(value, list) or value.denominator != 1:
        raise EncodeError(f"Operand '{expr}' is not an integer")
    return int(value)


def parse_operand(operand, mnemonic):
    """Parse operand string → (mode, expression_string).

    Mode may be a provisional mode like 'zp_or_abs' resolved later.
    """
    s = operand.strip()

    if not s:
        if mnemonic in SHIFT_OPS:
            return 'acc', ''
        return 'imp', ''

    if s.lower() == 'a' and mnemonic in SHIFT_OPS:
        return 'acc', ''

    # Immediate: #expr
    if s.startswith('#'):
        return 'imm', s[1:].strip()

    # Indirect modes
    if s.startswith('('):
        inner = s[1:]
        # (expr),Y
        m = re.match(r'^(.+)\)\s*,\s*[yY]\s*$', inner)
        if m:
            return 'izy', m.group(1).strip()
        # (expr,X)
        m = re.match(r'^(.+),\s*[xX]\s*\)\s*$', inner)
        if m:
            return 'izx', m.group(1).strip()
        # (expr), only JMP has it
        if mnemonic == 'jmp':
            m = re.match(r'^(.+)\)\s*$', inner)
            if m:
                return 'ind', m.group(1).strip()

    # Indexed: expr,X or expr,Y
    m = re.match(r'^(.+),\s*([xXyY])\s*$', s)
    if m:
        idx = m.group(2).lower()
        return ('abx_or_zpx' if idx == 'x' else 'aby_or_zpy'), m.group(1).strip()

    # Branches → relative
    if mnemonic in BRANCHES:
        return 'rel', s

    # Plain expression → ZP or ABS (decided by value)
    return 'zp_or_abs', s


def _indexed(mnemonic, zp_mode, abs_mode, value, label):
    if 0 <= value <= 0xFF and (mnemonic, zp_mode) in OPCODES:
        return bytes([OPCODES[(mnemonic, zp_mode)], value])
    opcode = OPCODES.get((mnemonic, abs_mode))
    if opcode is None:
        raise EncodeError(f"No {label} mode for {mnemonic}")
    return bytes([opcode, value & 0xFF, (value >> 8) & 0xFF])


def encode(mnemonic, operand, pc):
    """Encode one 6502 instruction.

    Returns:
        bytes object (1-3 bytes of machine code).

    Raises:
        EncodeError for unknown mnemonics, invalid mode/mnemonic combos,
        bad operands and out-of-range branches.
    """
    mnemonic = mnemonic.lower()
    if mnemonic not in ALL_MNEMONICS:
        raise EncodeError(f"Unknown instruction: '{mnemonic}'")
    mode, expr_str = parse_operand(operand, mnemonic)

    # No operand
    if mode in ('imp', 'acc'):
        opcode = OPCODES.get((mnemonic, mode))
        if opcode is None:
            raise EncodeError(f"{mnemonic} needs an operand")
        return bytes([opcode])

    value = operand_value(expr_str)

    # ── Relative (branches) ──
    if mode == 'rel':
        offset = value - (pc + 2)
        if not (-128 <= offset <= 127):
            raise EncodeError(
                f"Branch out of range: {mnemonic} "
                f"(offset {offset:+d}, PC=${pc:04X} target=${value:04X})")
        return bytes([OPCODES[(mnemonic, 'rel')], offset & 0xFF])

    if not 0 <= value <= 0xFFFF:
        raise EncodeError(f"Operand out of range: {mnemonic} {operand.strip()}")

    # ── Single-byte operand modes ──
    if mode in ('imm', 'izy', 'izx'):
        opcode = OPCODES.get((mnemonic, mode))
        if opcode is None:
            raise EncodeError(f"No {mode} mode for {mnemonic}")
        if value > 0xFF:
            raise EncodeError(
                f"Operand does not fit in a byte: {mnemonic} {operand.strip()}")
        return bytes([opcode, value])

    # ── Indirect: (abs), JMP only ──
    if mode == 'ind':
        return bytes([OPCODES[(mnemonic, 'ind')], value & 0xFF, value >> 8])

    if mode == 'zp_or_abs':
        return _indexed(mnemonic, 'zp', 'abs', value, 'absolute')
    if mode == 'abx_or_zpx':
        return _indexed(mnemonic, 'zpx', 'abx', value, 'absolute,X')
    if mode == 'aby_or_zpy':
        return _indexed(mnemonic, 'zpy', 'aby', value, 'absolute,Y')

    raise EncodeError(f"Cannot encode: {mnemonic} {operand}")
