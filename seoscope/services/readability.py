"""Flesch Reading Ease approximation."""
import re

_SENTENCE_BREAKS = re.compile(r"[.!?]+")
_VOWEL_RUNS = re.compile(r"[aeiouyäöü]+")


def count_syllables(word: str) -> int:
    """Approximate syllables as runs of consecutive vowels (y and umlauts included)."""
    return len(_VOWEL_RUNS.findall(word.lower()))


def calculate_readability(text: str) -> float:
    """Return a 0-100 reading-ease score; 0 for text without words.

    Every piece of a split on terminator runs counts as a sentence, including
    the empty piece after a trailing terminator.
    """
    words = (text or "").split()
    if not words:
        return 0.0
    sentences = _SENTENCE_BREAKS.split(text)

    syllables = sum(count_syllables(w) for w in words)
    words_per_sentence = len(words) / len(sentences)
    syllables_per_word = syllables / len(words)
    score = 206.835 - 1.015 * words_per_sentence - 84.6 * syllables_per_word
    return max(0.0, min(100.0, score))
