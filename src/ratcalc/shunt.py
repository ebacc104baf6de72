"""Shunting-yard translator: token list → expression tree.

One pass over the tokens with an operator stack and an output stack.
Operators are attached to their operands as soon as they leave the
operator stack, so the output holds finished subtrees, not postfix.

Grouping is encoded in the weight table. An opener is pushed with its own
weight, then rewritten to its closer's weight so that ordinary operators
can never drain past it; only the matching closer reaches it. ``{`` also
puts an empty ARRAY accumulator on the output, and every ``,`` / ``}``
moves the finished element below it into the accumulator.
"""

from .errors import InternalError, StructuralError
from .scanner import scan
from .tokens import OPERATORS, TokenKind


class ExprNode:
    """Expression tree node: token kind, payload and ordered children."""
    __slots__ = ('kind', 'value', 'children', 'pos')

    def __init__(self, kind, value=None, children=None, pos=0):
        self.kind = kind
        self.value = value
        self.children = children if children is not None else []
        self.pos = pos

    @classmethod
    def from_token(cls, token):
        return cls(token.kind, token.value, pos=token.pos)

    def __repr__(self):
        if self.kind is TokenKind.NUMBER:
            return f"ExprNode(NUMBER, {self.value})"
        if self.children:
            return f"ExprNode({self.kind.name}, {len(self.children)} children)"
        if self.value is not None:
            return f"ExprNode({self.kind.name}, {self.value!r})"
        return f"ExprNode({self.kind.name})"


# ── Weight table ─────────────────────────────────────────────────────

WEIGHTS = {
    # flat values go straight to the output
    TokenKind.NUMBER: 0, TokenKind.ARRAY: 0,
    # values that lower to flat ones in the reducer
    TokenKind.STRING: -1, TokenKind.ASM: -1,

    TokenKind.OPEN_BRACE: 1,
    TokenKind.OPEN_PAREN: 2,
    TokenKind.LSHIFT: 3, TokenKind.RSHIFT: 3, TokenKind.EXP: 3,
    TokenKind.MUL: 4, TokenKind.DIV: 4,
    TokenKind.ADD: 5, TokenKind.SUB: 5,

    TokenKind.CLOSE_PAREN: 31,
    TokenKind.COMMA: 32, TokenKind.CLOSE_BRACE: 32,
}

CLOSER_WEIGHT = 30

# opener → weight it carries once on the stack
_REWRITE = {
    TokenKind.OPEN_PAREN: WEIGHTS[TokenKind.CLOSE_PAREN],
    TokenKind.OPEN_BRACE: WEIGHTS[TokenKind.CLOSE_BRACE],
}


def _weight(token):
    try:
        return WEIGHTS[token.kind]
    except KeyError:
        raise InternalError(
            f"No precedence for token kind {token.kind.name}",
            token.pos) from None


# ── Translator ───────────────────────────────────────────────────────

class _Shunt:
    """Internal translation state.

    ``ops`` entries are ``(kind, weight, pos, mark)``; *mark* is the output
    depth when a group opened, so operators inside the group can never
    take operands from outside it.
    """

    def __init__(self):
        self.ops = []
        self.output = []
        self.operand_ready = False

    def _floor(self):
        for kind, _, _, mark in reversed(self.ops):
            if kind in _REWRITE:
                return mark
        return 0

    def _emit(self, kind, pos):
        """Attach the two newest outputs to operator *kind*."""
        if kind in _REWRITE:
            what = 'parenthesis' if kind is TokenKind.OPEN_PAREN else 'brace'
            raise StructuralError(f"Unclosed {what}", pos)
        if kind not in OPERATORS:
            raise InternalError(f"Cannot emit {kind.name} as an operator", pos)
        if len(self.output) - self._floor() < 2:
            raise StructuralError(
                f"Operator '{kind.value}' is missing an operand", pos)
        right = self.output.pop()
        left = self.output.pop()
        self.output.append(ExprNode(kind, children=[left, right], pos=pos))

    def _drain(self, weight):
        closer = weight > CLOSER_WEIGHT
        while self.ops:
            kind, top, pos, _ = self.ops[-1]
            if top > weight:
                break
            if closer and top >= weight:
                break
            self.ops.pop()
            self._emit(kind, pos)

    def _commit(self, token, closing):
        """Move the pending element into the innermost ARRAY accumulator."""
        mark = self.ops[-1][3]
        pending = len(self.output) - mark
        acc = self.output[mark - 1]
        if acc.kind is not TokenKind.ARRAY:
            raise StructuralError("Missing array accumulator", token.pos)
        if pending == 0:
            if closing and not acc.children and not self.operand_ready:
                return
            raise StructuralError("Empty array element", token.pos)
        if pending > 1:
            raise StructuralError(
                "Array element is not a single expression", token.pos)
        acc.children.append(self.output.pop())

    def _value(self, token):
        if self.operand_ready:
            raise StructuralError("Missing operator between operands", token.pos)
        self.output.append(ExprNode.from_token(token))
        self.operand_ready = True

    def push(self, token):
        weight = _weight(token)
        kind = token.kind

        if weight <= 0:
            self._value(token)
            return

        if kind in _REWRITE:
            if self.operand_ready:
                raise StructuralError(
                    "Missing operator before group", token.pos)
            self._drain(weight)
            if kind is TokenKind.OPEN_BRACE:
                self.output.append(ExprNode(TokenKind.ARRAY, pos=token.pos))
            self.ops.append((kind, _REWRITE[kind], token.pos, len(self.output)))
            return

        if kind is TokenKind.CLOSE_PAREN:
            if not self.operand_ready:
                raise StructuralError("Expected a value before ')'", token.pos)
            self._drain(weight)
            if not self.ops or self.ops[-1][0] is not TokenKind.OPEN_PAREN:
                raise StructuralError("Unmatched ')'", token.pos)
            if len(self.output) - self.ops[-1][3] != 1:
                raise StructuralError(
                    "Parenthesised group is not a single expression", token.pos)
            self.ops.pop()
            return

        if kind is TokenKind.COMMA or kind is TokenKind.CLOSE_BRACE:
            closing = kind is TokenKind.CLOSE_BRACE
            self._drain(weight)
            if not self.ops or self.ops[-1][0] is not TokenKind.OPEN_BRACE:
                if closing:
                    raise StructuralError("Unmatched '}'", token.pos)
                raise StructuralError("Comma outside of an array", token.pos)
            self._commit(token, closing)
            if closing:
                self.ops.pop()
                self.operand_ready = True
            else:
                self.operand_ready = False
            return

        # binary operator
        if not self.operand_ready:
            raise StructuralError(
                f"Operator '{kind.value}' is missing its left operand",
                token.pos)
        self._drain(weight)
        self.ops.append((kind, weight, token.pos, None))
        self.operand_ready = False

    def finish(self):
        while self.ops:
            kind, _, pos, _ = self.ops.pop()
            self._emit(kind, pos)
        if not self.output:
            return None
        if len(self.output) > 1:
            raise StructuralError(
                "Expression has more than one root", self.output[1].pos)
        return self.output[0]


def translate(tokens):
    """Build an expression tree from scanned tokens.

    Returns:
        The root ``ExprNode``, or ``None`` for an empty token list.

    Raises:
        StructuralError on mismatched grouping, misplaced commas or
        operators without operands.
        InternalError on a token kind the scanner never produces.
    """
    shunt = _Shunt()
    for token in tokens:
        shunt.push(token)
    return shunt.finish()


def parse(source):
    """Scan and translate *source* in one step."""
    return translate(scan(source))


def _label(node):
    if node.kind is TokenKind.NUMBER:
        return str(node.value)
    if node.kind in (TokenKind.STRING, TokenKind.ASM):
        quote = '"' if node.kind is TokenKind.STRING else '`'
        return f"{quote}{node.value}{quote}"
    if node.kind is TokenKind.ARRAY:
        return 'ARRAY'
    return node.kind.name


def format_tree(node, depth=0):
    """Render *node* one line per node, tab-indented by depth."""
    if node is None:
        return ''
    lines = []
    stack = [(node, depth)]
    while stack:
        current, level = stack.pop()
        lines.append('\t' * level + _label(current))
        stack.extend((child, level + 1) for child in reversed(current.children))
    return '\n'.join(lines)
