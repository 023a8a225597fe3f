"""Keystroke log analytics: words, n-grams, fingers, hands and characters.

All per-position groupings key on the expected character at the
keystroke's index, so a mistyped slot still counts toward the character
that should have been typed there. Keystrokes whose index falls outside
the target text are skipped.
"""

import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Optional, Sequence

from drillcore.finger_map import FINGER_IDS, FingerMap, get_finger_map, hand_for_finger
from drillcore.models import (
    BigramAnalysis,
    CharacterAnalysis,
    CharacterType,
    CharacterTypeAnalysis,
    FingerAnalysis,
    Hand,
    HandAnalysis,
    HandStats,
    KeystrokeEvent,
    TrigramAnalysis,
    TypingAnalytics,
    WordAnalysis,
)
from drillcore.wpm_calculator import calculate_wpm, round_half_up, wpm_from_delay
from drillutils.keyboard_layouts import DEFAULT_LAYOUT_ID

log = logging.getLogger("typedrill.analytics")

WORD_PATTERN = re.compile(r"\S+")


@dataclass
class _GroupStats:
    delays: list[int] = field(default_factory=list)
    errors: int = 0
    chars: int = 0
    seen: list[str] = field(default_factory=list)

    def add_seen(self, char: str) -> None:
        if char not in self.seen:
            self.seen.append(char)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _expected_char(target_text: str, index: int) -> Optional[str]:
    if 0 <= index < len(target_text):
        return target_text[index]
    return None


def _delay(keystrokes: Sequence[KeystrokeEvent], i: int) -> Optional[int]:
    """Time since the previous keystroke in the log, None for the first."""
    if i == 0:
        return None
    return keystrokes[i].timestamp - keystrokes[i - 1].timestamp


def get_character_type(char: str) -> CharacterType:
    """Classify a character with simple ASCII class tests."""
    if "a" <= char <= "z":
        return CharacterType.LOWERCASE
    if "A" <= char <= "Z":
        return CharacterType.UPPERCASE
    if "0" <= char <= "9":
        return CharacterType.NUMBERS
    if char.isspace():
        return CharacterType.WHITESPACE
    return CharacterType.PUNCTUATION


def calculate_analytics(
    keystrokes: Sequence[KeystrokeEvent],
    target_text: str,
    finger_map: Optional[FingerMap] = None,
) -> TypingAnalytics:
    """Calculate typing analytics from a keystroke log.

    Args:
        keystrokes: Keystroke log in arrival order (not modified)
        target_text: Text the log was typed against
        finger_map: Finger lookup for the active layout (default: QWERTY US)

    Returns:
        TypingAnalytics; an empty log yields a zeroed report
    """
    if not keystrokes:
        return TypingAnalytics()

    if finger_map is None:
        finger_map = get_finger_map(DEFAULT_LAYOUT_ID)

    keystrokes = list(keystrokes)
    total_time = max(0, keystrokes[-1].timestamp - keystrokes[0].timestamp)

    out_of_range = sum(1 for k in keystrokes if _expected_char(target_text, k.index) is None)
    if out_of_range:
        log.debug(f"Skipping {out_of_range} keystrokes outside the target text")

    return TypingAnalytics(
        keystrokes=keystrokes,
        words=analyze_words(keystrokes, target_text),
        bigrams=analyze_bigrams(keystrokes, target_text),
        trigrams=analyze_trigrams(keystrokes, target_text),
        fingers=analyze_fingers(keystrokes, target_text, total_time, finger_map),
        hands=analyze_hands(keystrokes, target_text, total_time, finger_map),
        characters=analyze_characters(keystrokes, target_text),
        character_types=analyze_character_types(keystrokes, target_text),
        total_time=total_time,
        total_chars=len(keystrokes),
    )


def analyze_words(
    keystrokes: Sequence[KeystrokeEvent], target_text: str
) -> list[WordAnalysis]:
    """Per-word timing, fastest words first.

    Each occurrence spans from its first to its last logged keystroke;
    occurrences of the same word are merged.
    """
    times: dict[str, list[int]] = defaultdict(list)
    errors: dict[str, int] = defaultdict(int)

    for match in WORD_PATTERN.finditer(target_text):
        word = match.group(0)
        start, end = match.start(), match.end()
        in_word = [k for k in keystrokes if start <= k.index < end]
        if not in_word:
            continue

        span = in_word[-1].timestamp - in_word[0].timestamp if len(in_word) > 1 else 0
        times[word].append(span)
        errors[word] += sum(1 for k in in_word if not k.is_correct)

    result = []
    for word, spans in times.items():
        avg_time = _mean(spans)
        total_chars = len(word) * len(spans)
        accuracy = (total_chars - errors[word]) / total_chars if total_chars else 1.0
        result.append(WordAnalysis(
            word=word,
            count=len(spans),
            avg_time=int(round_half_up(avg_time)),
            wpm=int(round_half_up(calculate_wpm(len(word), avg_time))),
            errors=errors[word],
            accuracy=round_half_up(accuracy, 2),
        ))

    return sorted(result, key=lambda w: w.avg_time)


def _analyze_ngrams(
    keystrokes: Sequence[KeystrokeEvent], target_text: str, n: int
) -> dict[str, tuple[list[int], int]]:
    """Collect spans and error counts of index-consecutive n-grams."""
    times: dict[str, list[int]] = defaultdict(list)
    errors: dict[str, int] = defaultdict(int)

    for i in range(n - 1, len(keystrokes)):
        window = keystrokes[i - n + 1:i + 1]
        if any(window[j + 1].index != window[j].index + 1 for j in range(n - 1)):
            continue

        chars = [_expected_char(target_text, k.index) for k in window]
        if None in chars:
            continue

        ngram = "".join(chars)
        times[ngram].append(window[-1].timestamp - window[0].timestamp)
        if not all(k.is_correct for k in window):
            errors[ngram] += 1

    return {ngram: (spans, errors[ngram]) for ngram, spans in times.items()}


def analyze_bigrams(
    keystrokes: Sequence[KeystrokeEvent], target_text: str
) -> list[BigramAnalysis]:
    """Letter-pair transitions, slowest first."""
    result = [
        BigramAnalysis(
            bigram=bigram,
            chars=(bigram[0], bigram[1]),
            count=len(spans),
            avg_time=int(round_half_up(_mean(spans))),
            errors=error_count,
        )
        for bigram, (spans, error_count) in _analyze_ngrams(keystrokes, target_text, 2).items()
    ]
    return sorted(result, key=lambda b: b.avg_time, reverse=True)


def analyze_trigrams(
    keystrokes: Sequence[KeystrokeEvent], target_text: str
) -> list[TrigramAnalysis]:
    """Three-character sequences, slowest first."""
    result = [
        TrigramAnalysis(
            trigram=trigram,
            chars=(trigram[0], trigram[1], trigram[2]),
            count=len(spans),
            avg_time=int(round_half_up(_mean(spans))),
            errors=error_count,
        )
        for trigram, (spans, error_count) in _analyze_ngrams(keystrokes, target_text, 3).items()
    ]
    return sorted(result, key=lambda t: t.avg_time, reverse=True)


def analyze_fingers(
    keystrokes: Sequence[KeystrokeEvent],
    target_text: str,
    total_time: int,
    finger_map: FingerMap,
) -> list[FingerAnalysis]:
    """Per-finger performance, strongest (highest wpm) first."""
    fingers = {finger: _GroupStats() for finger in FINGER_IDS}

    for i, ks in enumerate(keystrokes):
        expected = _expected_char(target_text, ks.index)
        if expected is None:
            continue
        finger = finger_map.finger_for(expected)
        if finger is None:
            continue

        data = fingers[finger]
        data.chars += 1
        if not ks.is_correct:
            data.errors += 1
        delay = _delay(keystrokes, i)
        if delay is not None:
            data.delays.append(delay)

    result = []
    for finger, data in fingers.items():
        if data.chars == 0:
            continue
        accuracy = (data.chars - data.errors) / data.chars
        result.append(FingerAnalysis(
            finger=FINGER_IDS[finger],
            finger_num=finger,
            hand=hand_for_finger(finger),
            count=data.chars,
            avg_delay=int(round_half_up(_mean(data.delays))),
            wpm=int(round_half_up(calculate_wpm(data.chars, total_time))),
            errors=data.errors,
            accuracy=round_half_up(accuracy, 2),
        ))

    return sorted(result, key=lambda f: f.wpm, reverse=True)


def analyze_hands(
    keystrokes: Sequence[KeystrokeEvent],
    target_text: str,
    total_time: int,
    finger_map: FingerMap,
) -> HandAnalysis:
    """Left/right hand totals; accuracy is a whole percent."""
    hands = {Hand.LEFT: _GroupStats(), Hand.RIGHT: _GroupStats()}

    for ks in keystrokes:
        expected = _expected_char(target_text, ks.index)
        if expected is None:
            continue
        finger = finger_map.finger_for(expected)
        if finger is None:
            continue

        data = hands[hand_for_finger(finger)]
        data.chars += 1
        if not ks.is_correct:
            data.errors += 1

    def _hand_stats(data: _GroupStats) -> HandStats:
        if data.chars == 0:
            return HandStats(count=0, wpm=0, accuracy=100)
        return HandStats(
            count=data.chars,
            wpm=int(round_half_up(calculate_wpm(data.chars, total_time))),
            accuracy=int(round_half_up((data.chars - data.errors) / data.chars * 100)),
        )

    return HandAnalysis(left=_hand_stats(hands[Hand.LEFT]),
                        right=_hand_stats(hands[Hand.RIGHT]))


def analyze_characters(
    keystrokes: Sequence[KeystrokeEvent], target_text: str
) -> list[CharacterAnalysis]:
    """Per expected character, slowest (highest mean delay) first."""
    chars: dict[str, _GroupStats] = {}

    for i, ks in enumerate(keystrokes):
        expected = _expected_char(target_text, ks.index)
        if expected is None:
            continue

        data = chars.setdefault(expected, _GroupStats())
        if not ks.is_correct:
            data.errors += 1
            data.add_seen(ks.char)
        delay = _delay(keystrokes, i)
        if delay is not None:
            data.delays.append(delay)

    result = []
    for char, data in chars.items():
        avg_delay = _mean(data.delays)
        result.append(CharacterAnalysis(
            char=char,
            # A character with no recorded delay still counts once.
            count=len(data.delays) or 1,
            avg_delay=int(round_half_up(avg_delay)),
            wpm=int(round_half_up(wpm_from_delay(avg_delay))),
            errors=data.errors,
            mistypes=data.seen,
        ))

    return sorted(result, key=lambda c: c.avg_delay, reverse=True)


def analyze_character_types(
    keystrokes: Sequence[KeystrokeEvent], target_text: str
) -> list[CharacterTypeAnalysis]:
    """Per character class, slowest (highest mean delay) first."""
    types: dict[CharacterType, _GroupStats] = {}

    for i, ks in enumerate(keystrokes):
        expected = _expected_char(target_text, ks.index)
        if expected is None:
            continue

        data = types.setdefault(get_character_type(expected), _GroupStats())
        data.add_seen(expected)
        delay = _delay(keystrokes, i)
        if delay is not None:
            data.delays.append(delay)

    result = []
    for char_type, data in types.items():
        avg_delay = _mean(data.delays)
        result.append(CharacterTypeAnalysis(
            type=char_type,
            label=char_type.label,
            count=len(data.delays) or 1,
            avg_delay=int(round_half_up(avg_delay)),
            wpm=int(round_half_up(wpm_from_delay(avg_delay))),
            chars=data.seen,
        ))

    return sorted(result, key=lambda t: t.avg_delay, reverse=True)
