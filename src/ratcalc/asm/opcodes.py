"""NMOS 6502 opcode table: ``(mnemonic, mode) → opcode``.

Modes: imp acc imm zp zpx zpy abs abx aby ind izx izy rel
"""

# mnemonic: imm zp zpx abs abx aby izx izy
_ALU = {
    'adc': (0x69, 0x65, 0x75, 0x6D, 0x7D, 0x79, 0x61, 0x71),
    'and': (0x29, 0x25, 0x35, 0x2D, 0x3D, 0x39, 0x21, 0x31),
    'cmp': (0xC9, 0xC5, 0xD5, 0xCD, 0xDD, 0xD9, 0xC1, 0xD1),
    'eor': (0x49, 0x45, 0x55, 0x4D, 0x5D, 0x59, 0x41, 0x51),
    'lda': (0xA9, 0xA5, 0xB5, 0xAD, 0xBD, 0xB9, 0xA1, 0xB1),
    'ora': (0x09, 0x05, 0x15, 0x0D, 0x1D, 0x19, 0x01, 0x11),
    'sbc': (0xE9, 0xE5, 0xF5, 0xED, 0xFD, 0xF9, 0xE1, 0xF1),
}
_ALU_MODES = ('imm', 'zp', 'zpx', 'abs', 'abx', 'aby', 'izx', 'izy')

# mnemonic: acc zp zpx abs abx
_SHIFT = {
    'asl': (0x0A, 0x06, 0x16, 0x0E, 0x1E),
    'lsr': (0x4A, 0x46, 0x56, 0x4E, 0x5E),
    'rol': (0x2A, 0x26, 0x36, 0x2E, 0x3E),
    'ror': (0x6A, 0x66, 0x76, 0x6E, 0x7E),
}
_SHIFT_MODES = ('acc', 'zp', 'zpx', 'abs', 'abx')

_IMPLIED = {
    'brk': 0x00, 'clc': 0x18, 'cld': 0xD8, 'cli': 0x58, 'clv': 0xB8,
    'dex': 0xCA, 'dey': 0x88, 'inx': 0xE8, 'iny': 0xC8, 'nop': 0xEA,
    'pha': 0x48, 'php': 0x08, 'pla': 0x68, 'plp': 0x28, 'rti': 0x40,
    'rts': 0x60, 'sec': 0x38, 'sed': 0xF8, 'sei': 0x78, 'tax': 0xAA,
    'tay': 0xA8, 'tsx': 0xBA, 'txa': 0x8A, 'txs': 0x9A, 'tya': 0x98,
}

_BRANCH = {
    'bcc': 0x90, 'bcs': 0xB0, 'beq': 0xF0, 'bmi': 0x30,
    'bne': 0xD0, 'bpl': 0x10, 'bvc': 0x50, 'bvs': 0x70,
}

_OTHER = {
    ('bit', 'zp'): 0x24, ('bit', 'abs'): 0x2C,
    ('cpx', 'imm'): 0xE0, ('cpx', 'zp'): 0xE4, ('cpx', 'abs'): 0xEC,
    ('cpy', 'imm'): 0xC0, ('cpy', 'zp'): 0xC4, ('cpy', 'abs'): 0xCC,
    ('dec', 'zp'): 0xC6, ('dec', 'zpx'): 0xD6,
    ('dec', 'abs'): 0xCE, ('dec', 'abx'): 0xDE,
    ('inc', 'zp'): 0xE6, ('inc', 'zpx'): 0xF6,
    ('inc', 'abs'): 0xEE, ('inc', 'abx'): 0xFE,
    ('jmp', 'abs'): 0x4C, ('jmp', 'ind'): 0x6C,
    ('jsr', 'abs'): 0x20,
    ('ldx', 'imm'): 0xA2, ('ldx', 'zp'): 0xA6, ('ldx', 'zpy'): 0xB6,
    ('ldx', 'abs'): 0xAE, ('ldx', 'aby'): 0xBE,
    ('ldy', 'imm'): 0xA0, ('ldy', 'zp'): 0xA4, ('ldy', 'zpx'): 0xB4,
    ('ldy', 'abs'): 0xAC, ('ldy', 'abx'): 0xBC,
    ('sta', 'zp'): 0x85, ('sta', 'zpx'): 0x95, ('sta', 'abs'): 0x8D,
    ('sta', 'abx'): 0x9D, ('sta', 'aby'): 0x99,
    ('sta', 'izx'): 0x81, ('sta', 'izy'): 0x91,
    ('stx', 'zp'): 0x86, ('stx', 'zpy'): 0x96, ('stx', 'abs'): 0x8E,
    ('sty', 'zp'): 0x84, ('sty', 'zpx'): 0x94, ('sty', 'abs'): 0x8C,
}


def _build():
    table = {}
    for mn, codes in _ALU.items():
        table.update(((mn, mode), op) for mode, op in zip(_ALU_MODES, codes))
    for mn, codes in _SHIFT.items():
        table.update(((mn, mode), op) for mode, op in zip(_SHIFT_MODES, codes))
    table.update(((mn, 'imp'), op) for mn, op in _IMPLIED.items())
    table.update(((mn, 'rel'), op) for mn, op in _BRANCH.items())
    table.update(_OTHER)
    return table


OPCODES = _build()
BRANCHES = frozenset(_BRANCH)
SHIFT_OPS = frozenset(_SHIFT)
ALL_MNEMONICS = frozenset(mn for mn, _ in OPCODES)
