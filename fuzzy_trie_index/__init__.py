"""
Fuzzy Trie Index - in-memory dictionary index with typo-tolerant lookup.

This package provides a prefix-tree index over a vocabulary that changes at
runtime, with exact insertion and removal of tokens and approximate lookup
by Levenshtein edit distance, exposed through a small HTTP service.
"""

__version__ = "1.0.0"

from .core.trie import Trie, TrieNode
from .core.service import IndexService
from .models.response import FuzzyResult

__all__ = [
    "Trie",
    "TrieNode",
    "IndexService",
    "FuzzyResult",
]
