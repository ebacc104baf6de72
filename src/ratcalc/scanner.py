"""Expression scanner.

Handles:
  - Integer literals: decimal, hex (0x1F), binary (0b101), octal (017)
  - "string" literals and `asm` literals (no escapes)
  - ( ) { } , and the operators + - * / ^ << >>
"""

from fractions import Fraction

from .errors import LexicalError
from .tokens import Token, TokenKind


WHITESPACE = ' \t\n\r\v\f'

SYMBOLS = {
    '(': TokenKind.OPEN_PAREN,
    ')': TokenKind.CLOSE_PAREN,
    '{': TokenKind.OPEN_BRACE,
    '}': TokenKind.CLOSE_BRACE,
    ',': TokenKind.COMMA,
    '+': TokenKind.ADD,
    '-': TokenKind.SUB,
    '*': TokenKind.MUL,
    '/': TokenKind.DIV,
    '^': TokenKind.EXP,
}

PAIRS = {
    '<<': TokenKind.LSHIFT,
    '>>': TokenKind.RSHIFT,
}

QUOTES = {
    '"': TokenKind.STRING,
    '`': TokenKind.ASM,
}

_HEX = '0123456789abcdefABCDEF'
_OCT = '01234567'
_BIN = '01'
_DEC = '0123456789'


# ── Numeric literals ─────────────────────────────────────────────────

def _digits(text, i, allowed):
    j = i
    n = len(text)
    while j < n and text[j] in allowed:
        j += 1
    return j


def read_integer(text, start=0):
    """Read a radix-prefixed integer literal at *start*.

    Returns:
        ``(value, length)``; ``(None, 0)`` when no literal starts here.

    Raises:
        LexicalError on a prefix without digits (``0x``) or a literal
        running straight into characters it cannot absorb (``09``, ``12ab``).
    """
    n = len(text)
    if start >= n or text[start] not in _DEC:
        return None, 0

    c = text[start]
    if c == '0' and start + 1 < n and text[start + 1] in 'xXbB':
        prefix = text[start + 1].lower()
        base, allowed = (16, _HEX) if prefix == 'x' else (2, _BIN)
        j = _digits(text, start + 2, allowed)
        if j == start + 2:
            raise LexicalError(
                f"Missing digits after '0{prefix}' in numeric literal", start)
        value = int(text[start + 2:j], base)
    elif c == '0':
        j = _digits(text, start + 1, _OCT)
        value = int(text[start:j], 8)
    else:
        j = _digits(text, start, _DEC)
        value = int(text[start:j])

    if j < n and (text[j].isalnum() or text[j] == '_'):
        raise LexicalError(
            f"Malformed numeric literal '{text[start:j + 1]}'", start)
    return value, j - start


# ── Scanner ──────────────────────────────────────────────────────────

def scan(source):
    """Split *source* into a list of tokens.

    Raises:
        LexicalError on the first character that cannot be consumed. The
        tokens produced up to that point are kept on ``err.tokens``.
    """
    tokens = []
    i = 0
    n = len(source)
    while i < n:
        c = source[i]

        if c in WHITESPACE:
            i += 1
            continue

        if c in SYMBOLS:
            tokens.append(Token(SYMBOLS[c], pos=i))
            i += 1
            continue

        pair = source[i:i + 2]
        if pair in PAIRS:
            tokens.append(Token(PAIRS[pair], pos=i))
            i += 2
            continue

        # "..." first, then `...`
        if c in QUOTES:
            end = source.find(c, i + 1)
            if end < 0:
                kind = 'string' if c == '"' else 'asm'
                raise LexicalError(f"Unterminated {kind} literal", i, tokens)
            tokens.append(Token(QUOTES[c], source[i + 1:end], pos=i))
            i = end + 1
            continue

        try:
            value, length = read_integer(source, i)
        except LexicalError as e:
            e.tokens = list(tokens)
            raise
        if length:
            tokens.append(Token(TokenKind.NUMBER, Fraction(value), pos=i))
            i += length
            continue

        raise LexicalError(f"Unexpected character '{c}'", i, tokens)

    return tokens
