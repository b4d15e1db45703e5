"""Bounded edit-distance search over a trie."""

from typing import List, TYPE_CHECKING

from rapidfuzz.distance import Levenshtein

from ..models.response import FuzzyResult

if TYPE_CHECKING:
    from .trie import TrieNode


def search_fuzzy(root: "TrieNode", query: str, max_distance: int) -> List[FuzzyResult]:
    """
    Find every word in the tree within an edit-distance budget of a query.

    The walk is depth-first with an explicit stack, so word length is not
    limited by the interpreter's recursion depth.

    Args:
        root: Root node of the trie to search
        query: The word to match against
        max_distance: Maximum Levenshtein distance a result may have

    Returns:
        List of FuzzyResult objects in traversal order
    """
    results: List[FuzzyResult] = []

    # The root spells the empty prefix and is never a candidate itself
    stack = _children_of(root, "")

    while stack:
        node, prefix = stack.pop()
        distance = Levenshtein.distance(prefix, query)

        if distance <= max_distance and node.is_terminal:
            results.append(FuzzyResult(token=prefix, distance=distance))

        # Extensions only get longer, so once the prefix outgrows the query the
        # length difference bounds the distance of everything below this node
        min_possible = len(prefix) - len(query)
        if min_possible > max_distance and distance > max_distance:
            continue

        stack.extend(_children_of(node, prefix))

    return results


def _children_of(node: "TrieNode", prefix: str) -> list:
    """Stack entries for a node's children, reversed so they pop in insertion order."""
    return [
        (child, prefix + char)
        for char, child in reversed(list(node.children.items()))
    ]
