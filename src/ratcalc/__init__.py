"""ratcalc: exact rational expression evaluator with strings and arrays.

Supports:
  - Arbitrary-precision rationals; integer literals in decimal, hex (0x),
    binary (0b) and octal (leading 0)
  - + - * / << >> with the usual precedence and ( ) grouping
  - { a, b, ... } arrays; "strings" lower to arrays of their bytes
  - Broadcasting: an operator with one array operand applies elementwise
  - `asm` literals, optionally assembled as 6502 machine code

Architecture:
  scanner  text → tokens
  shunt    tokens → expression tree (shunting-yard)
  reducer  tree → value tree (exact arithmetic, lowering, broadcasting)

Usage as library:
    from ratcalc import evaluate
    evaluate('(12 + 5) / (99 - 1 - 2 - 3 - 4 * 20)')   # Fraction(17, 13)
    evaluate('"AB" + 1')                               # [66, 67]
"""

from .errors import (EvalError, LexicalError, StructuralError, SemanticError,
                     InternalError, OutputError)
from .evaluator import evaluate, evaluate_tree
from .options import Options
from .reducer import reduce, to_value
from .scanner import scan
from .shunt import ExprNode, translate, parse, format_tree
from .tokens import Token, TokenKind

__version__ = '1.0.0'
