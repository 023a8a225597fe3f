"""Keyboard layout tables with finger assignments.

Finger ids: 1=left pinky, 2=left ring, 3=left middle, 4=left index,
5=left thumb, 6=right thumb, 7=right index, 8=right middle, 9=right ring,
10=right pinky.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class KeyDefinition:
    """A physical key: unshifted character, shifted character, finger."""
    key: str
    shift: Optional[str]
    finger: int


@dataclass(frozen=True)
class KeyboardLayout:
    """A named layout made of rows of key definitions."""
    id: str
    name: str
    locale: str
    rows: tuple[tuple[KeyDefinition, ...], ...]


def _row(*keys: tuple) -> tuple[KeyDefinition, ...]:
    return tuple(KeyDefinition(*k) for k in keys)


SPACE_ROW = _row((' ', None, 5))

QWERTY_US = KeyboardLayout(
    id='qwerty-us',
    name='QWERTY (US)',
    locale='en-US',
    rows=(
        _row(('`', '~', 1), ('1', '!', 1), ('2', '@', 2), ('3', '#', 3),
             ('4', '$', 4), ('5', '%', 4), ('6', '^', 7), ('7', '&', 7),
             ('8', '*', 8), ('9', '(', 9), ('0', ')', 10), ('-', '_', 10),
             ('=', '+', 10)),
        _row(('q', 'Q', 1), ('w', 'W', 2), ('e', 'E', 3), ('r', 'R', 4),
             ('t', 'T', 4), ('y', 'Y', 7), ('u', 'U', 7), ('i', 'I', 8),
             ('o', 'O', 9), ('p', 'P', 10), ('[', '{', 10), (']', '}', 10),
             ('\\', '|', 10)),
        _row(('a', 'A', 1), ('s', 'S', 2), ('d', 'D', 3),
             ('f', 'F', 4), ('g', 'G', 4), ('h', 'H', 7),
             ('j', 'J', 7), ('k', 'K', 8), ('l', 'L', 9),
             (';', ':', 10), ("'", '"', 10)),
        _row(('z', 'Z', 1), ('x', 'X', 2), ('c', 'C', 3), ('v', 'V', 4),
             ('b', 'B', 4), ('n', 'N', 7), ('m', 'M', 7), (',', '<', 8),
             ('.', '>', 9), ('/', '?', 10)),
        SPACE_ROW,
    ),
)

QWERTY_UK = KeyboardLayout(
    id='qwerty-uk',
    name='QWERTY (UK)',
    locale='en-GB',
    rows=(
        _row(('`', '¬', 1), ('1', '!', 1), ('2', '"', 2), ('3', '£', 3),
             ('4', '$', 4), ('5', '%', 4), ('6', '^', 7), ('7', '&', 7),
             ('8', '*', 8), ('9', '(', 9), ('0', ')', 10), ('-', '_', 10),
             ('=', '+', 10)),
        _row(('q', 'Q', 1), ('w', 'W', 2), ('e', 'E', 3), ('r', 'R', 4),
             ('t', 'T', 4), ('y', 'Y', 7), ('u', 'U', 7), ('i', 'I', 8),
             ('o', 'O', 9), ('p', 'P', 10), ('[', '{', 10), (']', '}', 10)),
        _row(('a', 'A', 1), ('s', 'S', 2), ('d', 'D', 3),
             ('f', 'F', 4), ('g', 'G', 4), ('h', 'H', 7),
             ('j', 'J', 7), ('k', 'K', 8), ('l', 'L', 9),
             (';', ':', 10), ("'", '@', 10), ('#', '~', 10)),
        _row(('\\', '|', 1), ('z', 'Z', 1), ('x', 'X', 2), ('c', 'C', 3),
             ('v', 'V', 4), ('b', 'B', 4), ('n', 'N', 7), ('m', 'M', 7),
             (',', '<', 8), ('.', '>', 9), ('/', '?', 10)),
        SPACE_ROW,
    ),
)

QWERTZ_DE = KeyboardLayout(
    id='qwerty-de',
    name='QWERTZ (German)',
    locale='de-DE',
    rows=(
        _row(('^', '°', 1), ('1', '!', 1), ('2', '"', 2), ('3', '§', 3),
             ('4', '$', 4), ('5', '%', 4), ('6', '&', 7), ('7', '/', 7),
             ('8', '(', 8), ('9', ')', 9), ('0', '=', 10), ('ß', '?', 10),
             ('´', '`', 10)),
        _row(('q', 'Q', 1), ('w', 'W', 2), ('e', 'E', 3), ('r', 'R', 4),
             ('t', 'T', 4), ('z', 'Z', 7), ('u', 'U', 7), ('i', 'I', 8),
             ('o', 'O', 9), ('p', 'P', 10), ('ü', 'Ü', 10), ('+', '*', 10)),
        _row(('a', 'A', 1), ('s', 'S', 2), ('d', 'D', 3),
             ('f', 'F', 4), ('g', 'G', 4), ('h', 'H', 7),
             ('j', 'J', 7), ('k', 'K', 8), ('l', 'L', 9),
             ('ö', 'Ö', 10), ('ä', 'Ä', 10), ('#', "'", 10)),
        _row(('<', '>', 1), ('y', 'Y', 1), ('x', 'X', 2), ('c', 'C', 3),
             ('v', 'V', 4), ('b', 'B', 4), ('n', 'N', 7), ('m', 'M', 7),
             (',', ';', 8), ('.', ':', 9), ('-', '_', 10)),
        SPACE_ROW,
    ),
)

# Digits sit on the shifted level of the AZERTY number row.
AZERTY_FR = KeyboardLayout(
    id='azerty-fr',
    name='AZERTY (French)',
    locale='fr-FR',
    rows=(
        _row(('²', None, 1), ('&', '1', 1), ('é', '2', 2), ('"', '3', 3),
             ("'", '4', 4), ('(', '5', 4), ('-', '6', 7), ('è', '7', 7),
             ('_', '8', 8), ('ç', '9', 9), ('à', '0', 10), (')', '°', 10),
             ('=', '+', 10)),
        _row(('a', 'A', 1), ('z', 'Z', 2), ('e', 'E', 3), ('r', 'R', 4),
             ('t', 'T', 4), ('y', 'Y', 7), ('u', 'U', 7), ('i', 'I', 8),
             ('o', 'O', 9), ('p', 'P', 10), ('^', '¨', 10), ('$', '£', 10)),
        _row(('q', 'Q', 1), ('s', 'S', 2), ('d', 'D', 3),
             ('f', 'F', 4), ('g', 'G', 4), ('h', 'H', 7),
             ('j', 'J', 7), ('k', 'K', 8), ('l', 'L', 9),
             ('m', 'M', 10), ('ù', '%', 10), ('*', 'µ', 10)),
        _row(('<', '>', 1), ('w', 'W', 1), ('x', 'X', 2), ('c', 'C', 3),
             ('v', 'V', 4), ('b', 'B', 4), ('n', 'N', 7), (',', '?', 8),
             (';', '.', 9), (':', '/', 10), ('!', '§', 10)),
        SPACE_ROW,
    ),
)

DVORAK = KeyboardLayout(
    id='dvorak',
    name='Dvorak',
    locale='en-US',
    rows=(
        _row(('`', '~', 1), ('1', '!', 1), ('2', '@', 2), ('3', '#', 3),
             ('4', '$', 4), ('5', '%', 4), ('6', '^', 7), ('7', '&', 7),
             ('8', '*', 8), ('9', '(', 9), ('0', ')', 10), ('[', '{', 10),
             (']', '}', 10)),
        _row(("'", '"', 1), (',', '<', 2), ('.', '>', 3), ('p', 'P', 4),
             ('y', 'Y', 4), ('f', 'F', 7), ('g', 'G', 7), ('c', 'C', 8),
             ('r', 'R', 9), ('l', 'L', 10), ('/', '?', 10), ('=', '+', 10),
             ('\\', '|', 10)),
        _row(('a', 'A', 1), ('o', 'O', 2), ('e', 'E', 3),
             ('u', 'U', 4), ('i', 'I', 4), ('d', 'D', 7),
             ('h', 'H', 7), ('t', 'T', 8), ('n', 'N', 9),
             ('s', 'S', 10), ('-', '_', 10)),
        _row((';', ':', 1), ('q', 'Q', 2), ('j', 'J', 3), ('k', 'K', 4),
             ('x', 'X', 4), ('b', 'B', 7), ('m', 'M', 7), ('w', 'W', 8),
             ('v', 'V', 9), ('z', 'Z', 10)),
        SPACE_ROW,
    ),
)

COLEMAK = KeyboardLayout(
    id='colemak',
    name='Colemak',
    locale='en-US',
    rows=(
        _row(('`', '~', 1), ('1', '!', 1), ('2', '@', 2), ('3', '#', 3),
             ('4', '$', 4), ('5', '%', 4), ('6', '^', 7), ('7', '&', 7),
             ('8', '*', 8), ('9', '(', 9), ('0', ')', 10), ('-', '_', 10),
             ('=', '+', 10)),
        _row(('q', 'Q', 1), ('w', 'W', 2), ('f', 'F', 3), ('p', 'P', 4),
             ('g', 'G', 4), ('j', 'J', 7), ('l', 'L', 7), ('u', 'U', 8),
             ('y', 'Y', 9), (';', ':', 10), ('[', '{', 10), (']', '}', 10),
             ('\\', '|', 10)),
        _row(('a', 'A', 1), ('r', 'R', 2), ('s', 'S', 3),
             ('t', 'T', 4), ('d', 'D', 4), ('h', 'H', 7),
             ('n', 'N', 7), ('e', 'E', 8), ('i', 'I', 9),
             ('o', 'O', 10), ("'", '"', 10)),
        _row(('z', 'Z', 1), ('x', 'X', 2), ('c', 'C', 3), ('v', 'V', 4),
             ('b', 'B', 4), ('k', 'K', 7), ('m', 'M', 7), (',', '<', 8),
             ('.', '>', 9), ('/', '?', 10)),
        SPACE_ROW,
    ),
)

LAYOUTS = {
    'qwerty-us': QWERTY_US,
    'qwerty-uk': QWERTY_UK,
    'qwerty-de': QWERTZ_DE,
    'azerty-fr': AZERTY_FR,
    'dvorak': DVORAK,
    'colemak': COLEMAK,
}

DEFAULT_LAYOUT_ID = 'qwerty-us'


def get_layout(layout_id: str) -> KeyboardLayout:
    """Get layout by id.

    Args:
        layout_id: Layout identifier ('qwerty-us', 'dvorak', etc.)

    Returns:
        The matching layout, or QWERTY (US) if the id is unknown
    """
    return LAYOUTS.get(layout_id, QWERTY_US)


def is_supported_layout(layout_id: str) -> bool:
    """Check if a layout table exists for the id."""
    return layout_id in LAYOUTS
