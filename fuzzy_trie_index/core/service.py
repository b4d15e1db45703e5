"""Index service owning a single trie behind a lock."""

import json
import threading
import time
from typing import Any, Dict, Iterable, List, Optional, Union

import structlog
from pydantic import ValidationError

from ..models.response import FuzzyResult
from .trie import Trie

logger = structlog.get_logger(__name__)

WordInput = Union[str, bytes, None]


def decode_word(word: WordInput) -> str:
    """
    Turn boundary input into a word, treating anything malformed as empty.

    Args:
        word: Text or UTF-8 bytes received from a caller

    Returns:
        The decoded word, or "" if it could not be decoded
    """
    if word is None:
        return ""

    if isinstance(word, bytes):
        try:
            word = word.decode("utf-8")
        except UnicodeDecodeError:
            return ""

    if not isinstance(word, str) or "\x00" in word:
        return ""

    return word


class IndexService:
    """
    Owns one Trie and serialises every operation on it with a single lock.

    Searches take the same lock as mutations, so a search never observes a
    node while it is being created or pruned.
    """

    def __init__(self, trie: Optional[Trie] = None) -> None:
        """
        Initialize the service.

        Args:
            trie: Existing trie to take ownership of (a new empty one if None)
        """
        self._trie = trie if trie is not None else Trie()
        self._lock = threading.Lock()
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "total_inserts": 0,
            "total_deletes": 0,
            "total_searches": 0,
            "total_resets": 0,
            "total_execution_time": 0.0,
        }

    def reset(self) -> None:
        """Replace the index with a fresh empty trie."""
        with self._lock:
            self._trie = Trie()
            self._stats["total_resets"] += 1
        logger.info("Index reset")

    def insert(self, word: WordInput) -> bool:
        """
        Insert a word.

        Args:
            word: The word to insert

        Returns:
            True if the word reached the index, False for empty input
        """
        word = decode_word(word)
        if not word:
            return False

        with self._lock:
            self._trie.insert(word)
            self._stats["total_inserts"] += 1
        return True

    def insert_many(self, words: Iterable[WordInput]) -> int:
        """
        Insert several words under one lock acquisition.

        Args:
            words: Words to insert; empty or undecodable ones are skipped

        Returns:
            Number of words inserted
        """
        decoded = [decode_word(word) for word in words]

        with self._lock:
            inserted = self._trie.insert_many(decoded)
            self._stats["total_inserts"] += inserted

        logger.info("Words loaded", inserted=inserted, skipped=len(decoded) - inserted)
        return inserted

    def delete(self, word: WordInput) -> bool:
        """
        Delete a word; absent words are a no-op.

        Args:
            word: The word to delete

        Returns:
            True if the request reached the index, False for empty input
        """
        word = decode_word(word)
        if not word:
            return False

        with self._lock:
            self._trie.delete(word)
            self._stats["total_deletes"] += 1
        return True

    def contains(self, word: WordInput) -> bool:
        """Check whether a word is currently indexed."""
        word = decode_word(word)
        if not word:
            return False

        with self._lock:
            return self._trie.contains(word)

    def search(self, word: WordInput, max_distance: int) -> List[FuzzyResult]:
        """
        Fuzzy search for words within `max_distance` edits.

        Args:
            word: Search word
            max_distance: Maximum Levenshtein distance

        Returns:
            List of FuzzyResult objects; empty for an empty word

        Raises:
            ValueError: If max_distance is negative
        """
        if max_distance < 0:
            raise ValueError("max_distance must be non-negative")

        word = decode_word(word)
        if not word:
            return []

        with self._lock:
            start_time = time.time()
            results = self._trie.search_fuzzy(word, max_distance)
            self._stats["total_searches"] += 1
            self._stats["total_execution_time"] += (time.time() - start_time) * 1000

        return results

    def match_tokens(self, word: WordInput, tolerance: int) -> List[FuzzyResult]:
        """
        Resolve a word to an exact hit or, failing that, fuzzy matches.

        Args:
            word: Token to resolve
            tolerance: Maximum Levenshtein distance for non-exact matches

        Returns:
            List of FuzzyResult objects

        Raises:
            ValueError: If tolerance is negative
        """
        if tolerance < 0:
            raise ValueError("tolerance must be non-negative")

        word = decode_word(word)
        if not word:
            return []

        with self._lock:
            start_time = time.time()
            results = self._trie.match_tokens(word, tolerance)
            self._stats["total_searches"] += 1
            self._stats["total_execution_time"] += (time.time() - start_time) * 1000

        return results

    def search_json(self, word: WordInput, max_distance: int) -> str:
        """
        Fuzzy search and encode the results as a JSON array.

        Encoding problems degrade to an empty array.

        Args:
            word: Search word
            max_distance: Maximum Levenshtein distance

        Returns:
            JSON text of the form [{"token": ..., "distance": ...}, ...]
        """
        results = self.search(word, max_distance)
        return encode_results(results)

    @staticmethod
    def parse_results(text: Union[str, bytes]) -> List[FuzzyResult]:
        """
        Decode a JSON result array produced by search_json.

        Args:
            text: JSON text

        Returns:
            List of FuzzyResult objects, or [] if the text is malformed
        """
        try:
            payload = json.loads(text)
            if not isinstance(payload, list):
                raise ValueError("expected a JSON array")
            return [FuzzyResult(**item) for item in payload]
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning("Failed to parse fuzzy results", error=str(e))
            return []

    def get_stats(self) -> Dict[str, Any]:
        """Get service statistics."""
        with self._lock:
            stats = self._stats.copy()
            stats["index_stats"] = self._trie.get_stats()

        if stats["total_searches"] > 0:
            stats["average_search_time_ms"] = (
                stats["total_execution_time"] / stats["total_searches"]
            )
        else:
            stats["average_search_time_ms"] = 0.0

        return stats

    def clear_stats(self) -> None:
        """Reset statistics without touching the index."""
        with self._lock:
            self._stats = self._empty_stats()


def encode_results(results: Iterable[FuzzyResult]) -> str:
    """
    Encode fuzzy results as a JSON array, degrading to "[]" on failure.

    Args:
        results: Results to encode

    Returns:
        JSON text
    """
    try:
        return json.dumps(
            [{"token": result.token, "distance": result.distance} for result in results],
            ensure_ascii=False,
        )
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning("Failed to encode fuzzy results", error=str(e))
        return "[]"
