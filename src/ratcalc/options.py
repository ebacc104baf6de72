"""Evaluation settings."""

ASM_MODES = ('reject', 'text', '6502')


class Options:
    """How the reducer treats `asm` literals.

    asm:
        ``reject`` — any asm literal is a semantic error (default).
        ``text``   — lowered to its bytes, exactly like a "string".
        ``6502``   — assembled as 6502 code, lowered to the machine code.
    org:
        Load address used for 6502 branch targets.
    """
    __slots__ = ('asm', 'org')

    def __init__(self, asm='reject', org=0):
        if asm not in ASM_MODES:
            raise ValueError(
                f"asm mode must be one of {', '.join(ASM_MODES)}, got {asm!r}")
        if not 0 <= org <= 0xFFFF:
            raise ValueError(f"org must be within $0000-$FFFF, got {org}")
        self.asm = asm
        self.org = org

    def __repr__(self):
        return f"Options(asm={self.asm!r}, org=0x{self.org:04X})"


DEFAULT = Options()
