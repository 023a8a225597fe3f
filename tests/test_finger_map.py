"""Tests for layout tables and the finger map."""

import pytest

from drillcore.finger_map import (
    FINGER_IDS,
    FingerMap,
    get_finger_map,
    hand_for_finger,
    needs_shift_for_layout,
)
from drillcore.models import FingerName, Hand
from drillutils.keyboard_layouts import (
    LAYOUTS,
    get_layout,
    is_supported_layout,
)


class TestLayoutTables:
    """Test the static layout tables."""

    def test_supported_layouts(self):
        assert set(LAYOUTS) == {
            'qwerty-us', 'qwerty-uk', 'qwerty-de', 'azerty-fr', 'dvorak', 'colemak'
        }

    @pytest.mark.parametrize("layout_id", sorted(LAYOUTS))
    def test_fingers_in_range(self, layout_id):
        for row in get_layout(layout_id).rows:
            for key_def in row:
                assert 1 <= key_def.finger <= 10

    @pytest.mark.parametrize("layout_id", sorted(LAYOUTS))
    def test_every_layout_has_space_and_letters(self, layout_id):
        finger_map = FingerMap(layout_id)
        assert finger_map.finger_for(' ') == 5
        for char in "abcdefghijklmnopqrstuvwxyz":
            assert finger_map.finger_for(char) is not None

    def test_unknown_layout_falls_back(self):
        assert get_layout('klingon').id == 'qwerty-us'
        assert not is_supported_layout('klingon')


class TestFingerMap:
    """Test character to finger lookup."""

    def test_home_row_qwerty(self):
        finger_map = get_finger_map('qwerty-us')
        assert [finger_map.finger_for(c) for c in "asdf"] == [1, 2, 3, 4]
        assert [finger_map.finger_for(c) for c in "jkl;"] == [7, 8, 9, 10]

    def test_shifted_character_uses_same_finger(self):
        finger_map = get_finger_map('qwerty-us')
        assert finger_map.finger_for('A') == finger_map.finger_for('a')
        assert finger_map.finger_for('!') == finger_map.finger_for('1')
        assert finger_map.finger_for(':') == 10

    def test_layout_specific_keys(self):
        assert get_finger_map('qwerty-de').finger_for('z') == 7
        assert get_finger_map('qwerty-us').finger_for('z') == 1
        assert get_finger_map('qwerty-de').finger_for('ö') == 10
        assert get_finger_map('azerty-fr').finger_for('a') == 1
        assert get_finger_map('colemak').finger_for('e') == 8

    def test_unmapped_character(self):
        finger_map = get_finger_map('qwerty-us')
        assert finger_map.finger_for('€') is None
        assert finger_map.finger_for('') is None
        assert finger_map.hand_for('€') is None

    def test_hand_for(self):
        finger_map = get_finger_map('qwerty-us')
        assert finger_map.hand_for('f') == Hand.LEFT
        assert finger_map.hand_for('J') == Hand.RIGHT
        assert finger_map.hand_for(' ') == Hand.LEFT

    def test_fingers_mapping_is_read_only(self):
        finger_map = get_finger_map('dvorak')
        with pytest.raises(TypeError):
            finger_map.fingers['a'] = 10

    def test_memoized(self):
        assert get_finger_map('dvorak') is get_finger_map('dvorak')
        assert get_finger_map('dvorak') is not get_finger_map('colemak')

    def test_unknown_layout_uses_qwerty(self, caplog):
        with caplog.at_level('WARNING', logger='typedrill.finger_map'):
            finger_map = FingerMap('klingon')

        assert finger_map.layout_id == 'qwerty-us'
        assert finger_map.finger_for('o') == 9
        assert 'klingon' in caplog.text


class TestNeedsShift:
    """Test shifted character detection."""

    def test_letters(self):
        assert needs_shift_for_layout('A', 'qwerty-us')
        assert not needs_shift_for_layout('a', 'qwerty-us')

    def test_digits_depend_on_layout(self):
        assert not needs_shift_for_layout('1', 'qwerty-us')
        assert needs_shift_for_layout('1', 'azerty-fr')
        assert not needs_shift_for_layout('&', 'azerty-fr')
        assert needs_shift_for_layout('&', 'qwerty-us')

    def test_symbols(self):
        assert needs_shift_for_layout('@', 'qwerty-us')
        assert needs_shift_for_layout('@', 'qwerty-uk')
        assert not needs_shift_for_layout('#', 'qwerty-uk')

    def test_space_and_empty(self):
        assert not needs_shift_for_layout(' ', 'qwerty-us')
        assert not needs_shift_for_layout('', 'qwerty-us')


class TestFingerIds:
    def test_hands(self):
        assert [hand_for_finger(f) for f in (1, 5, 6, 10)] == [
            Hand.LEFT, Hand.LEFT, Hand.RIGHT, Hand.RIGHT
        ]

    def test_names(self):
        assert FINGER_IDS[5] == FingerName.LEFT_THUMB
        assert FINGER_IDS[6] == FingerName.RIGHT_THUMB
        assert len(FINGER_IDS) == 10

    @pytest.mark.parametrize("layout_id", sorted(LAYOUTS))
    def test_every_table_finger_has_a_name(self, layout_id):
        """Finger names come from FINGER_IDS for every key of every layout."""
        for row in get_layout(layout_id).rows:
            for key_def in row:
                assert isinstance(FINGER_IDS[key_def.finger], FingerName)
