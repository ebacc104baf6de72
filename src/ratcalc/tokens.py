"""Token vocabulary shared by the scanner, translator and reducer."""

from enum import Enum


class TokenKind(Enum):
    # grouping
    OPEN_PAREN = '('
    CLOSE_PAREN = ')'
    OPEN_BRACE = '{'
    CLOSE_BRACE = '}'
    COMMA = ','

    # arithmetic
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    EXP = '^'
    LSHIFT = '<<'
    RSHIFT = '>>'

    # literals
    NUMBER = 'number'
    STRING = 'string'
    ASM = 'asm'

    # tree only, never scanned
    ARRAY = 'array'


OPERATORS = frozenset({
    TokenKind.ADD, TokenKind.SUB, TokenKind.MUL, TokenKind.DIV,
    TokenKind.EXP, TokenKind.LSHIFT, TokenKind.RSHIFT,
})

LITERALS = frozenset({TokenKind.NUMBER, TokenKind.STRING, TokenKind.ASM})

GROUPING = frozenset({
    TokenKind.OPEN_PAREN, TokenKind.CLOSE_PAREN,
    TokenKind.OPEN_BRACE, TokenKind.CLOSE_BRACE, TokenKind.COMMA,
})

SCANNABLE = OPERATORS | LITERALS | GROUPING


class Token:
    """One scanned token.

    ``value`` depends on *kind*:

    ==================  ===============================
    kind                value
    ==================  ===============================
    NUMBER              ``fractions.Fraction``
    STRING, ASM         raw body text between the quotes
    everything else     ``None``
    ==================  ===============================
    """
    __slots__ = ('kind', 'value', 'pos')

    def __init__(self, kind, value=None, pos=0):
        self.kind = kind
        self.value = value
        self.pos = pos

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind is other.kind and self.value == other.value

    def __repr__(self):
        if self.value is None:
            return f"Token({self.kind.name})"
        return f"Token({self.kind.name}, {self.value!r})"
