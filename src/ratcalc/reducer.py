"""Tree reducer: expression tree → value tree.

Children are reduced depth-first, left to right, before their parent.
Each operator node is then rewritten in place into its result, so a
successfully reduced tree holds only NUMBER leaves and ARRAY nodes.

Broadcasting: when exactly one operand is an ARRAY the operator is
distributed over that array's elements, down through nested arrays.
Two ARRAY operands are rejected.
"""

from fractions import Fraction

from .errors import SemanticError, StructuralError
from .options import DEFAULT
from .shunt import ExprNode
from .tokens import OPERATORS, TokenKind


# ── Leaf lowering ────────────────────────────────────────────────────

def _lower_bytes(node, data):
    """Rewrite *node* into an ARRAY of one NUMBER per byte of *data*."""
    node.children = [ExprNode(TokenKind.NUMBER, Fraction(b), pos=node.pos)
                     for b in data]
    node.kind = TokenKind.ARRAY
    node.value = None


def _lower_asm(node, options):
    if options.asm == 'reject':
        raise SemanticError(
            "asm literals are not supported (use --asm text or --asm 6502)",
            node.pos)
    if options.asm == 'text':
        _lower_bytes(node, node.value.encode('utf-8'))
        return
    from .asm import assemble, EncodeError
    try:
        code = assemble(node.value, options.org)
    except EncodeError as e:
        raise SemanticError(f"asm: {e}", node.pos) from e
    _lower_bytes(node, code)


# ── Arithmetic ───────────────────────────────────────────────────────

def _shift(value, count, left):
    """Shift the numerator of *value*; the denominator is kept."""
    n = int(count)
    if n < 0:
        n, left = -n, not left
    num = value.numerator << n if left else value.numerator >> n
    return Fraction(num, value.denominator)


def _arith(kind, lhs, rhs, pos):
    if kind is TokenKind.ADD:
        return lhs + rhs
    if kind is TokenKind.SUB:
        return lhs - rhs
    if kind is TokenKind.MUL:
        return lhs * rhs
    if kind is TokenKind.DIV:
        if rhs == 0:
            raise SemanticError("Division by zero", pos)
        return lhs / rhs
    if kind is TokenKind.LSHIFT:
        return _shift(lhs, rhs, True)
    if kind is TokenKind.RSHIFT:
        return _shift(lhs, rhs, False)
    raise SemanticError(f"Unsupported operator '{kind.value}'", pos)


def _is_value(node):
    return node.kind is TokenKind.NUMBER or node.kind is TokenKind.ARRAY


def _check_operands(kind, left, right):
    if not (_is_value(left) and _is_value(right)):
        bad = right if _is_value(left) else left
        raise SemanticError(
            f"Operand of '{kind.value}' is not a value ({bad.kind.name})",
            bad.pos)


def combine(kind, left, right, pos=0):
    """Apply operator *kind* to two reduced operands.

    Returns a new node; neither operand is modified. Nested arrays are
    walked with an explicit stack, so depth is not bounded by recursion.
    """
    results = []
    # (left, right, list the result node is appended to)
    stack = [(left, right, results)]
    while stack:
        lhs, rhs, dest = stack.pop()
        _check_operands(kind, lhs, rhs)
        if lhs.kind is TokenKind.ARRAY:
            if rhs.kind is TokenKind.ARRAY:
                raise SemanticError(
                    f"Cannot apply '{kind.value}' to two arrays", pos)
            node = ExprNode(TokenKind.ARRAY, pos=lhs.pos)
            stack.extend((child, rhs, node.children)
                         for child in reversed(lhs.children))
        elif rhs.kind is TokenKind.ARRAY:
            node = ExprNode(TokenKind.ARRAY, pos=rhs.pos)
            stack.extend((lhs, child, node.children)
                         for child in reversed(rhs.children))
        else:
            node = ExprNode(TokenKind.NUMBER,
                            _arith(kind, lhs.value, rhs.value, pos),
                            pos=lhs.pos)
        dest.append(node)
    return results[0]


# ── Reducer ──────────────────────────────────────────────────────────

def _reduce_operator(node):
    kind = node.kind
    if kind not in OPERATORS:
        raise SemanticError(f"Cannot reduce {kind.name} node", node.pos)
    if len(node.children) != 2:
        raise StructuralError(
            f"Operator '{kind.value}' needs 2 operands, "
            f"has {len(node.children)}", node.pos)

    left, right = node.children
    result = combine(kind, left, right, node.pos)
    node.kind = result.kind
    node.value = result.value
    node.children = result.children


def reduce(node, options=None):
    """Reduce *node* in place to a NUMBER or a (nested) ARRAY of NUMBERs.

    Post-order walk over an explicit stack: a left-deep chain such as
    ``1 + 1 + ... + 1`` is as deep as it is long.

    Returns *node*.

    Raises:
        StructuralError if an operator node does not have two children.
        SemanticError on division by zero, array-with-array, EXP, a
        rejected asm literal or a non-value operand.
    """
    options = options or DEFAULT
    stack = [(node, False)]
    while stack:
        current, visited = stack.pop()
        kind = current.kind

        if kind is TokenKind.NUMBER:
            continue
        if kind is TokenKind.STRING:
            _lower_bytes(current, current.value.encode('utf-8'))
            continue
        if kind is TokenKind.ASM:
            _lower_asm(current, options)
            continue

        if not visited:
            stack.append((current, True))
            stack.extend((child, False) for child in reversed(current.children))
            continue

        if kind is not TokenKind.ARRAY:
            _reduce_operator(current)
    return node


def to_value(node):
    """Convert a reduced tree to ``Fraction`` / nested ``list``."""
    results = []
    stack = [(node, results)]
    while stack:
        current, dest = stack.pop()
        if current.kind is TokenKind.NUMBER:
            dest.append(current.value)
        elif current.kind is TokenKind.ARRAY:
            items = []
            dest.append(items)
            stack.extend((child, items) for child in reversed(current.children))
        else:
            raise SemanticError(
                f"{current.kind.name} node is not a value", current.pos)
    return results[0]
