"""Pure functions for comparing two transcriptions of the same audio."""

from __future__ import annotations

from dataclasses import dataclass

MISSING_WORD = '(missing)'


@dataclass(frozen=True)
class TextDifference:
    position: int  # 1-based word index
    word1: str
    word2: str


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between *a* and *b* (insert/delete/substitute, cost 1)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], current[j - 1], previous[j]) + 1)
        previous = current
    return previous[-1]


def calculate_similarity(a: str, b: str) -> float:
    """Case-insensitive similarity in [0, 1]; two empty strings are identical."""
    a, b = a.casefold(), b.casefold()
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    distance = levenshtein_distance(a, b)
    return max(0.0, (longest - distance) / longest)


def find_text_differences(text1: str, text2: str, max_differences: int = 10) -> list[TextDifference]:
    """Return the first *max_differences* word-level differences between two texts."""
    words1 = text1.split()
    words2 = text2.split()
    differences: list[TextDifference] = []
    for i in range(max(len(words1), len(words2))):
        if len(differences) >= max_differences:
            break
        word1 = words1[i] if i < len(words1) else MISSING_WORD
        word2 = words2[i] if i < len(words2) else MISSING_WORD
        if word1 != word2:
            differences.append(TextDifference(position=i + 1, word1=word1, word2=word2))
    return differences


def word_count(text: str) -> int:
    return len(text.split())
