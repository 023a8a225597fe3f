"""Layout-aware character to finger lookup."""

import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from drillcore.models import FingerName, Hand
from drillutils.keyboard_layouts import get_layout, is_supported_layout

log = logging.getLogger("typedrill.finger_map")

FINGER_IDS = {
    1: FingerName.LEFT_PINKY,
    2: FingerName.LEFT_RING,
    3: FingerName.LEFT_MIDDLE,
    4: FingerName.LEFT_INDEX,
    5: FingerName.LEFT_THUMB,
    6: FingerName.RIGHT_THUMB,
    7: FingerName.RIGHT_INDEX,
    8: FingerName.RIGHT_MIDDLE,
    9: FingerName.RIGHT_RING,
    10: FingerName.RIGHT_PINKY,
}


def hand_for_finger(finger: int) -> Hand:
    """Fingers 1-5 belong to the left hand, 6-10 to the right."""
    return Hand.LEFT if finger <= 5 else Hand.RIGHT


class FingerMap:
    """Character to finger lookup for one keyboard layout.

    Both the unshifted and the shifted character of a key resolve to the
    key's finger. Build instances through get_finger_map() so each layout
    is only scanned once.
    """

    def __init__(self, layout_id: str):
        """Initialize finger map.

        Args:
            layout_id: Layout identifier; unknown ids fall back to QWERTY (US)
        """
        if not is_supported_layout(layout_id):
            log.warning(f"Unknown keyboard layout '{layout_id}', using qwerty-us")

        layout = get_layout(layout_id)
        self.layout_id = layout.id

        fingers: dict[str, int] = {}
        shift_chars: set[str] = set()
        for row in layout.rows:
            for key_def in row:
                fingers[key_def.key] = key_def.finger
                if key_def.shift:
                    fingers[key_def.shift] = key_def.finger
                    shift_chars.add(key_def.shift)

        self._fingers: Mapping[str, int] = MappingProxyType(fingers)
        self._shift_chars = frozenset(shift_chars)

    @property
    def fingers(self) -> Mapping[str, int]:
        """Read-only character to finger id mapping."""
        return self._fingers

    @property
    def shift_chars(self) -> frozenset[str]:
        """Characters produced on the shifted level of some key."""
        return self._shift_chars

    def finger_for(self, char: str) -> Optional[int]:
        """Finger id for a character, or None if no key produces it.

        Falls back to the lowercase form so capitals from letters missing a
        shifted entry still resolve.
        """
        if not char:
            return None
        finger = self._fingers.get(char)
        if finger is None:
            finger = self._fingers.get(char.lower())
        return finger

    def hand_for(self, char: str) -> Optional[Hand]:
        finger = self.finger_for(char)
        if finger is None:
            return None
        return hand_for_finger(finger)

    def needs_shift(self, char: str) -> bool:
        """True iff the character is the shifted form of some key."""
        return bool(char) and char in self._shift_chars

    def __repr__(self) -> str:
        return f"FingerMap({self.layout_id!r})"


@lru_cache(maxsize=None)
def get_finger_map(layout_id: str) -> FingerMap:
    """Memoized FingerMap for a layout id."""
    return FingerMap(layout_id)


def needs_shift_for_layout(char: str, layout_id: str) -> bool:
    return get_finger_map(layout_id).needs_shift(char)
