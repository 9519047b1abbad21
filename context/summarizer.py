"""
Content degradation for the summary tier.

A summarizer is any function ``(content, target_length) -> str`` whose
result never exceeds ``target_length`` characters. The default is
extractive: keep leading whole sentences, fall back to a word-boundary
head cut with an ellipsis marker.
"""

import re
from typing import Callable

Summarizer = Callable[[str, int], str]

ELLIPSIS = "..."

# Sentence end followed by whitespace; keeps the punctuation with the sentence
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")


def head_truncate(content: str, target_length: int) -> str:
    """
    Cut ``content`` to at most ``target_length`` characters.

    Prefers the last word boundary and appends an ellipsis marker when
    there is room for it.

    Args:
        content: Text to shorten
        target_length: Hard ceiling on the result length

    Returns:
        Shortened text, ``""`` for empty input or non-positive target
    """
    if not content or target_length <= 0:
        return ""
    if len(content) <= target_length:
        return content
    if target_length <= len(ELLIPSIS):
        return content[:target_length]

    window = content[: target_length - len(ELLIPSIS)]
    cut = window.rfind(" ")
    if cut > len(window) // 2:
        window = window[:cut]
    return window.rstrip() + ELLIPSIS


def summarize(content: str, target_length: int) -> str:
    """
    Extractive summary of at most ``target_length`` characters.

    Keeps as many leading sentences as fit. When not even the first
    sentence fits, falls back to ``head_truncate``.

    Args:
        content: Full item content
        target_length: Hard ceiling on the result length

    Returns:
        Summary text
    """
    if not content or target_length <= 0:
        return ""
    if len(content) <= target_length:
        return content

    budget = target_length - len(ELLIPSIS)
    kept = []
    used = 0
    for sentence in _SENTENCE_END.split(content.strip()):
        sentence = " ".join(sentence.split())
        if not sentence:
            continue
        cost = len(sentence) + (1 if kept else 0)
        if used + cost > budget:
            break
        kept.append(sentence)
        used += cost

    if not kept:
        return head_truncate(content, target_length)

    return " ".join(kept) + ELLIPSIS
