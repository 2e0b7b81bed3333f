"""
Word Count Utilities for the Text Analyzer
==========================================

Whitespace tokenization and sentence splitting, plus the word and sentence
counts derived from them. Missing or empty content always counts as zero.
"""

import re
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

SENTENCE_TERMINATORS = ".!?"

# Every terminator is its own split point, so "Hi!!" yields an empty fragment.
_TERMINATOR_RE = re.compile(f"[{re.escape(SENTENCE_TERMINATORS)}]")
_TERMINATOR_RUN_RE = re.compile(f"[{re.escape(SENTENCE_TERMINATORS)}]+")


def tokenize(content: Optional[str]) -> List[str]:
    """
    Split text into word tokens.

    A token is a maximal run of non-whitespace characters; case and any
    punctuation attached to a word are kept verbatim.

    Args:
        content: Text to tokenize (None is treated as empty)

    Returns:
        List of tokens, empty for None, empty or whitespace-only content
    """
    if not content:
        return []
    return content.split()


def split_sentences(content: Optional[str], collapse_terminators: bool = False) -> List[str]:
    """
    Split text into sentence fragments on '.', '!' and '?'.

    Each terminator is a split point, so text ending in punctuation yields a
    trailing empty fragment and text without terminators yields one fragment.

    Args:
        content: Text to split (None is treated as empty)
        collapse_terminators: Treat a run of terminators ("?!", "...") as one split point

    Returns:
        List of fragments, empty for None or empty content
    """
    if not content:
        return []
    pattern = _TERMINATOR_RUN_RE if collapse_terminators else _TERMINATOR_RE
    return pattern.split(content)


def count_words(content: Optional[str]) -> int:
    return len(tokenize(content))


def count_sentences(content: Optional[str], collapse_terminators: bool = False) -> int:
    return len(split_sentences(content, collapse_terminators=collapse_terminators))


def count_words_and_sentences(
    content: Optional[str],
    collapse_terminators: bool = False,
) -> Dict[str, int]:
    """Return {"words": ..., "sentences": ...} for the given text."""
    if not content:
        logger.debug("No content to count; reporting zero words and sentences")
        return {"words": 0, "sentences": 0}

    return {
        "words": count_words(content),
        "sentences": count_sentences(content, collapse_terminators=collapse_terminators),
    }
