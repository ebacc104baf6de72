"""scan → translate → reduce."""

from .errors import StructuralError
from .reducer import reduce, to_value
from .scanner import scan
from .shunt import translate


def build_tree(tokens):
    """Translate *tokens*; an empty expression is a ``StructuralError``."""
    root = translate(tokens)
    if root is None:
        raise StructuralError("Empty expression")
    return root


def evaluate_tree(source, options=None):
    """Evaluate *source* and return the reduced ``ExprNode``."""
    return reduce(build_tree(scan(source)), options)


def evaluate(source, options=None):
    """Evaluate an expression string.

    Args:
        source: Expression text, e.g. ``'{1, 2, 3} * 2'``.
        options: ``Options`` controlling asm literals (default: reject).

    Returns:
        ``fractions.Fraction`` for a scalar result, or a (nested) ``list``
        of them for an array result.

    Raises:
        LexicalError, StructuralError, SemanticError (all ``EvalError``).
    """
    return to_value(evaluate_tree(source, options))
