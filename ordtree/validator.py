"""
ordtree/validator.py
Structural validator for BTree plus a seeded randomised stress harness.

validate(tree) walks the tree once and returns "VALID" or the first
violation found as "INVALID: <reason>". Illegal tree states are reported
as return values, never raised.

run_generated_test(t, n, seed) inserts n distinct random keys, deletes
half of them, then clears the rest, validating after every mutation.
Each step is traced on this module's logger at DEBUG level.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass

from ordtree.btree import BTree, BTreeNode

logger = logging.getLogger(__name__)

VALID = "VALID"
PASS = "PASS"


@dataclass
class _LeafDepth:
    """Depth of the first leaf seen; shared across the whole descent."""
    value: int = -1


def validate(tree: BTree) -> str:
    """Return "VALID" or an "INVALID: …" description of the first violation."""
    if tree.t < 2:
        return "INVALID: t must be >= 2"
    if tree.root is None:
        return VALID
    return _validate_node(
        tree.root,
        is_root=True,
        t=tree.t,
        min_exclusive=None,
        max_exclusive=None,
        depth=0,
        leaf_depth=_LeafDepth(),
    )


def _validate_node(
    node: BTreeNode | None,
    is_root: bool,
    t: int,
    min_exclusive: int | None,
    max_exclusive: int | None,
    depth: int,
    leaf_depth: _LeafDepth,
) -> str:
    if node is None:
        return "INVALID: null node pointer"

    num_keys = len(node.keys)
    num_children = len(node.children)

    # 1. degree consistency
    if node.t != t:
        return "INVALID: node->t differs from tree->t"

    # 2. key count bounds
    if num_keys > 2 * t - 1:
        return "INVALID: node has more than 2t-1 keys"
    if not is_root and num_keys < t - 1:
        return "INVALID: non-root node has fewer than t-1 keys"
    if is_root and not node.is_leaf and num_keys == 0:
        return "INVALID: root internal node has 0 keys"

    # 3./4. leaf and children rules
    if node.is_leaf:
        if num_children != 0:
            return "INVALID: leaf node has children"
        if leaf_depth.value == -1:
            leaf_depth.value = depth
        elif leaf_depth.value != depth:
            return "INVALID: leaves are not all at same depth"
    else:
        if num_children != num_keys + 1:
            return "INVALID: internal node children != keys + 1"
        if any(c is None for c in node.children):
            return "INVALID: internal node has null child"

    # 5. keys strictly increasing and inside the parent's interval
    for i, key in enumerate(node.keys):
        if i > 0 and node.keys[i - 1] >= key:
            return "INVALID: keys not strictly increasing"
        # None is an open bound (-inf on the left, +inf on the right)
        if (min_exclusive is not None and key <= min_exclusive) or (
            max_exclusive is not None and key >= max_exclusive
        ):
            return "INVALID: key violates parent interval constraint"

    # 6. recurse with narrowed intervals
    if not node.is_leaf:
        bounds = [min_exclusive, *node.keys, max_exclusive]
        for i, child in enumerate(node.children):
            verdict = _validate_node(
                child,
                is_root=False,
                t=t,
                min_exclusive=bounds[i],
                max_exclusive=bounds[i + 1],
                depth=depth + 1,
                leaf_depth=leaf_depth,
            )
            if verdict != VALID:
                return verdict

    return VALID


# ── Randomised harness ───────────────────────────────────────────────

def _trace(phase: str, i: int, key: int, t: int, n: int, seed: int) -> None:
    logger.debug(
        "[BTREE-TEST] phase=%s i=%d key=%d t=%d n=%d seed=%d",
        phase, i, key, t, n, seed,
    )


def _fail(reason: str, i: int, key: int, t: int, n: int, seed: int,
          verdict: str, progress: str | None = None) -> str:
    parts = [f"FAIL: {reason}", f"i={i}", f"key={key}"]
    if progress is not None:
        parts.append(progress)
    parts += [f"t={t}", f"n={n}", f"seed={seed}", f'validator="{verdict}"']
    return " | ".join(parts)


def run_generated_test(t: int, n: int, seed: int = 123456789) -> str:
    """
    Run the insert / delete-half / clear stress test.

    Returns "PASS", or a "FAIL: …" string naming the phase, iteration,
    key, parameters and validator verdict so the run can be reproduced.
    """
    if t < 2:
        return "FAIL: t must be >= 2"
    if n < 0:
        return "FAIL: n must be >= 0"

    logger.debug("[BTREE-TEST] START t=%d n=%d seed=%d", t, n, seed)

    tree = BTree(t)
    rng = random.Random(seed)

    pool = list(range(1, max(1, 4 * n) + 1))
    rng.shuffle(pool)

    inserted: list[int] = []

    # INSERT phase
    for i in range(n):
        key = pool[i]
        _trace("INSERT:before", i, key, t, n, seed)
        tree.insert(key)
        inserted.append(key)
        _trace("INSERT:after", i, key, t, n, seed)

        _trace("VALIDATE:afterInsert:before", i, key, t, n, seed)
        verdict = validate(tree)
        _trace("VALIDATE:afterInsert:after", i, key, t, n, seed)
        if verdict != VALID:
            return _fail("validator failed after INSERT", i, key, t, n, seed, verdict)

    rng.shuffle(inserted)
    del_count = n // 2

    # DELETE half phase
    for i in range(del_count):
        key = inserted[i]
        _trace("DELETE_HALF:before", i, key, t, n, seed)
        tree.remove(key)
        _trace("DELETE_HALF:after", i, key, t, n, seed)

        _trace("VALIDATE:afterDeleteHalf:before", i, key, t, n, seed)
        verdict = validate(tree)
        _trace("VALIDATE:afterDeleteHalf:after", i, key, t, n, seed)
        if verdict != VALID:
            return _fail(
                "validator failed after DELETE (half phase)", i, key, t, n, seed,
                verdict, progress=f"deleted={i + 1}/{del_count}",
            )

    # CLEAR phase (delete remaining)
    for clear_idx, key in enumerate(inserted[del_count:]):
        _trace("CLEAR:before", clear_idx, key, t, n, seed)
        tree.remove(key)
        _trace("CLEAR:after", clear_idx, key, t, n, seed)

        _trace("VALIDATE:afterClearDelete:before", clear_idx, key, t, n, seed)
        verdict = validate(tree)
        _trace("VALIDATE:afterClearDelete:after", clear_idx, key, t, n, seed)
        if verdict != VALID:
            return _fail(
                "validator failed during CLEAR phase", clear_idx, key, t, n, seed,
                verdict, progress=f"cleared={clear_idx + 1}/{n - del_count}",
            )

    logger.debug("[BTREE-TEST] PASS t=%d n=%d seed=%d", t, n, seed)
    return PASS
