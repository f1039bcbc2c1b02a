"""
ordtree/__main__.py
Command-line entry point for ordtree.

Usage:
    python -m ordtree clinic [FILE]                   # run a dispatcher script
    python -m ordtree btree --degree 3 10 20 5 6      # build a B-Tree, print it
    python -m ordtree check --degree 4 --count 200    # randomised B-Tree check

Add -v before the sub-command for DEBUG logging (harness trace lines).
"""

from __future__ import annotations
import argparse
import logging
import sys

from ordtree.btree import BTree
from ordtree.clinic import ScriptError, run_script
from ordtree.validator import PASS, VALID, run_generated_test, validate


# ── Sub-commands ─────────────────────────────────────────────────────

def _cmd_clinic(args: argparse.Namespace) -> int:
    if args.file is None or args.file == "-":
        text = sys.stdin.read()
    else:
        with open(args.file, encoding="utf-8") as f:
            text = f.read()
    for line in run_script(text):
        print(line)
    return 0


def _cmd_btree(args: argparse.Namespace) -> int:
    tree = BTree(args.degree)
    for key in args.keys:
        tree.insert(key)
    for key in args.remove:
        tree.remove(key)

    print("B-Tree traversal (sorted): " + " ".join(str(k) for k in tree.traverse()))
    for key in args.search:
        print(f"Search {key}: {'FOUND' if tree.search(key) is not None else 'NOT FOUND'}")

    verdict = validate(tree)
    if verdict != VALID:
        print(verdict)
        return 1
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    result = run_generated_test(args.degree, args.count, args.seed)
    print(result)
    return 0 if result == PASS else 1


# ── Entry point ───────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m ordtree",
        description="B-Tree / Red-Black Tree tools",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable DEBUG logging on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("clinic", help="Run a patient dispatcher script")
    p.add_argument("file", nargs="?", default=None,
                   help="Script file (default: stdin)")
    p.set_defaults(func=_cmd_clinic)

    p = sub.add_parser("btree", help="Insert keys into a B-Tree and print it")
    p.add_argument("--degree", "-t", type=int, default=3, help="Minimum degree t (default: 3)")
    p.add_argument("--search", type=int, action="append", default=[], metavar="KEY",
                   help="Report whether KEY is present (repeatable)")
    p.add_argument("--remove", type=int, action="append", default=[], metavar="KEY",
                   help="Remove KEY after inserting (repeatable)")
    p.add_argument("keys", type=int, nargs="*", help="Keys to insert")
    p.set_defaults(func=_cmd_btree)

    p = sub.add_parser("check", help="Run the randomised B-Tree validator test")
    p.add_argument("--degree", "-t", type=int, default=4, help="Minimum degree t (default: 4)")
    p.add_argument("--count", "-n", type=int, default=200, help="Number of keys (default: 200)")
    p.add_argument("--seed", type=int, default=123456789, help="PRNG seed (default: 123456789)")
    p.set_defaults(func=_cmd_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except KeyError as e:
        print(f"Error: {e.args[0]}")
        return 2
    except (ScriptError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
