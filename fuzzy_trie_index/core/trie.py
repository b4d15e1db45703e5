"""Prefix tree index supporting insertion, pruning deletion and fuzzy lookup."""

from typing import Dict, Iterable, Iterator, List

from ..models.response import FuzzyResult
from .fuzzy_search import search_fuzzy


class TrieNode:
    """A single node in the trie."""

    __slots__ = ("children", "is_terminal")

    def __init__(self) -> None:
        self.children: Dict[str, "TrieNode"] = {}
        self.is_terminal = False

    def is_prunable(self) -> bool:
        """A node with no word ending here and nothing below it can be dropped."""
        return not self.is_terminal and not self.children


class Trie:
    """Character trie over a mutable vocabulary."""

    def __init__(self) -> None:
        """Initialize an empty trie."""
        self.root = TrieNode()

    def insert(self, word: str) -> None:
        """
        Insert a word, creating any missing nodes along its path.

        Args:
            word: The word to insert
        """
        node = self.root
        for char in word:
            child = node.children.get(char)
            if child is None:
                child = TrieNode()
                node.children[char] = child
            node = child
        node.is_terminal = True

    def insert_many(self, words: Iterable[str]) -> int:
        """
        Insert several words, skipping empty ones.

        Args:
            words: Words to insert

        Returns:
            Number of words inserted
        """
        inserted = 0
        for word in words:
            if not word:
                continue
            self.insert(word)
            inserted += 1
        return inserted

    def delete(self, word: str) -> None:
        """
        Remove a word and prune the nodes that no longer lead anywhere.

        Deleting a word that was never inserted leaves the tree untouched.
        The path is recorded on the way down and unwound with an explicit
        loop, so word length is not limited by recursion depth.

        Args:
            word: The word to remove
        """
        path = []
        node = self.root
        for char in word:
            child = node.children.get(char)
            if child is None:
                return
            path.append((node, char))
            node = child

        if not node.is_terminal:
            return
        node.is_terminal = False

        # Drop edges bottom-up while the child left behind is dead
        for parent, char in reversed(path):
            if not parent.children[char].is_prunable():
                break
            del parent.children[char]

    def contains(self, word: str) -> bool:
        """Check whether `word` is a live member of the trie."""
        node = self.root
        for char in word:
            node = node.children.get(char)
            if node is None:
                return False
        return node.is_terminal

    def search_fuzzy(self, query: str, max_distance: int) -> List[FuzzyResult]:
        """
        Find all words within `max_distance` edits of `query`.

        Args:
            query: The word to match against
            max_distance: Maximum Levenshtein distance

        Returns:
            List of FuzzyResult objects, order unspecified
        """
        return search_fuzzy(self.root, query, max_distance)

    def match_tokens(self, query: str, tolerance: int) -> List[FuzzyResult]:
        """
        Resolve a query token to indexed tokens.

        An exact member short-circuits to a single zero-distance result.
        Otherwise a fuzzy search runs when `tolerance` allows any edits.

        Args:
            query: The token to resolve
            tolerance: Maximum Levenshtein distance for non-exact matches

        Returns:
            List of FuzzyResult objects
        """
        if self.contains(query):
            return [FuzzyResult(token=query, distance=0)]

        if tolerance > 0:
            return self.search_fuzzy(query, tolerance)

        return []

    def words(self) -> Iterator[str]:
        """Yield every live word in depth-first child order."""
        stack = [(self.root, "")]
        while stack:
            node, prefix = stack.pop()
            if node.is_terminal and prefix:
                yield prefix
            # Reversed so children come off the stack in insertion order
            for char, child in reversed(list(node.children.items())):
                stack.append((child, prefix + char))

    def word_count(self) -> int:
        """Count live words."""
        return sum(1 for _ in self.words())

    def node_count(self) -> int:
        """Count nodes below the root."""
        count = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            count += len(node.children)
            stack.extend(node.children.values())
        return count

    def get_stats(self) -> Dict[str, int]:
        """Get structural statistics."""
        return {
            "word_count": self.word_count(),
            "node_count": self.node_count(),
        }

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return self.word_count()
