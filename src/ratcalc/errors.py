"""Error types for ratcalc."""


class EvalError(Exception):
    """Base error for ratcalc.

    Carries the message and, when known, the 0-based source column of the
    offending token. ``render(source)`` shows the source with a caret::

        Unexpected character '?' at column 4
            1 + ? 2
                ^
    """

    stage = 'eval'

    def __init__(self, msg, pos=None):
        self.msg = msg
        self.pos = pos
        super().__init__(self._format())

    def _format(self):
        if self.pos is None:
            return self.msg
        return f"{self.msg} at column {self.pos + 1}"

    def render(self, source=''):
        parts = [f"{self.stage} error: {self._format()}"]
        if source and self.pos is not None and '\n' not in source:
            parts.append(f"    {source}")
            parts.append('    ' + ' ' * self.pos + '^')
        return '\n'.join(parts)


class LexicalError(EvalError):
    """Unrecognised character, unterminated literal or malformed number.

    ``tokens`` holds whatever the scanner produced before it stopped.
    """
    stage = 'lexical'

    def __init__(self, msg, pos=None, tokens=()):
        self.tokens = list(tokens)
        super().__init__(msg, pos)


class StructuralError(EvalError):
    """Mismatched grouping, misplaced comma or operator missing operands."""
    stage = 'structural'


class SemanticError(EvalError):
    """Expression is well formed but cannot be evaluated."""
    stage = 'semantic'


class InternalError(EvalError):
    """A stage broke its own contract."""
    stage = 'internal'


class OutputError(EvalError):
    """Value cannot be packed into the requested binary form."""
    stage = 'output'
