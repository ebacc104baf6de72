"""ratcalc CLI: evaluate one expression.

Usage:
    ratcalc '1 << 4'                       Print 16
    echo '"AB" + 1' | ratcalc              Read from stdin, print {66, 67}
    ratcalc '"hi" - 32' -o out.bin         Write the bytes instead
    ratcalc '`lda #1; rts`' --asm 6502     Assemble the asm literal

Pipeline:
    1. Scan
    2. Translate (shunting-yard)
    3. Reduce
    4. Print value / write packed bytes
"""

import argparse
import sys

from .errors import EvalError
from .evaluator import build_tree
from .options import ASM_MODES, Options
from .output import DTYPES, format_value, pack_bytes
from .reducer import reduce, to_value
from .scanner import scan
from .shunt import format_tree


def _int_auto(text):
    """argparse type: integer with optional 0x / $ prefix."""
    if text.startswith('$'):
        return int(text[1:], 16)
    return int(text, 0)


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='ratcalc',
        description='Evaluate an exact rational expression with strings and arrays.',
        epilog="""Examples:
  ratcalc '(12 + 5)/(99 - 1 - 2 - 3 - 4 * 20)'    17/13
  ratcalc '{1, 2, 3} * 2'                         {2, 4, 6}
  ratcalc '"AB" + 1'                              {66, 67}
  ratcalc '"AB" + 1' -o ab.bin                    2 bytes written
  ratcalc '{0x1234} + 1' -o w.bin -w 2            little-endian words
  ratcalc '`ldx #0; inx; rts`' --asm 6502         {162, 0, 232, 96}""")

    parser.add_argument('expression', nargs='?', default=None,
                        help='Expression to evaluate (default: read stdin)')
    parser.add_argument('--asm', choices=ASM_MODES, default='reject',
                        help='asm literal handling: reject (default), '
                             'text (bytes of the literal), 6502 (assemble)')
    parser.add_argument('--org', type=_int_auto, default=0, metavar='ADDR',
                        help='Load address for --asm 6502 branches (default: 0)')
    parser.add_argument('-t', '--tree', action='store_true',
                        help='Print the translated tree before evaluating')
    parser.add_argument('-o', '--output', default=None,
                        help='Write the value as packed bytes to this file')
    parser.add_argument('-w', '--width', type=int, choices=sorted(DTYPES),
                        default=1,
                        help='Element width in bytes for -o (default: 1)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show stage details on stderr')

    args = parser.parse_args(argv)

    try:
        args.options = Options(asm=args.asm, org=args.org)
    except ValueError as e:
        parser.error(str(e))

    if args.expression is None or args.expression == '-':
        args.expression = sys.stdin.read()
    source = args.expression.strip()

    try:
        return run(args, source)
    except EvalError as e:
        print(e.render(source), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Unexpected error: {type(e).__name__}: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 2


def run(args, source) -> int:
    """Execute the evaluation pipeline."""
    verbose = args.verbose

    # ── 1. Scan ──
    tokens = scan(source)
    if verbose:
        print(f"Scanned {len(tokens)} tokens", file=sys.stderr)

    # ── 2. Translate ──
    root = build_tree(tokens)
    if args.tree or verbose:
        out = sys.stdout if args.tree else sys.stderr
        print(format_tree(root), file=out)

    # ── 3. Reduce ──
    reduce(root, args.options)
    value = to_value(root)

    # ── 4. Output ──
    if args.output:
        data = pack_bytes(value, args.width)
        with open(args.output, 'wb') as f:
            f.write(data)
        print(f"Wrote: {args.output} ({len(data)} bytes)")
    else:
        print(format_value(value))
    return 0
