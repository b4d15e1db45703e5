"""Core index functionality."""

from .trie import Trie, TrieNode
from .fuzzy_search import search_fuzzy
from .service import IndexService, decode_word, encode_results

__all__ = [
    "Trie",
    "TrieNode",
    "search_fuzzy",
    "IndexService",
    "decode_word",
    "encode_results",
]
