"""Keyboard layout detection for typedrill."""

import os
import subprocess
from typing import Optional

from drillutils.keyboard_layouts import DEFAULT_LAYOUT_ID

XKB_LAYOUT_TO_ID = {
    'us': 'qwerty-us',
    'gb': 'qwerty-uk',
    'uk': 'qwerty-uk',
    'de': 'qwerty-de',
    'at': 'qwerty-de',
    'ch': 'qwerty-de',
    'fr': 'azerty-fr',
    'be': 'azerty-fr',
}

XKB_VARIANT_TO_ID = {
    'dvorak': 'dvorak',
    'dvp': 'dvorak',
    'colemak': 'colemak',
    'colemak_dh': 'colemak',
}

LOCALE_TO_ID = {
    'en-US': 'qwerty-us',
    'en-GB': 'qwerty-uk',
    'en-AU': 'qwerty-us',
    'en-CA': 'qwerty-us',
    'en': 'qwerty-us',
    'de': 'qwerty-de',
    'de-DE': 'qwerty-de',
    'de-AT': 'qwerty-de',
    'de-CH': 'qwerty-de',
    'fr': 'azerty-fr',
    'fr-FR': 'azerty-fr',
    'fr-BE': 'azerty-fr',
    'fr-CA': 'qwerty-us',  # French Canadian uses QWERTY
}


def _first(value: str) -> str:
    # Multiple layouts are comma separated (e.g. "de,us"); the first is active
    return value.split(',')[0].strip().lower()


def _query_xkb(localectl_label: str, keyboard_key: str, setxkbmap_label: str,
               env_var: str) -> Optional[str]:
    """Read one XKB setting using the same probes in order.

    Detection priority:
    1. Environment variable (Wayland session)
    2. localectl status (system configuration)
    3. /etc/default/keyboard (Debian-based systems)
    4. setxkbmap -query (X11/Xwayland fallback)
    """
    value = os.environ.get(env_var)
    if value and value.strip():
        return _first(value)

    try:
        result = subprocess.run(
            ['localectl', 'status'],
            capture_output=True,
            text=True,
            timeout=5
        )
        for line in result.stdout.split('\n'):
            if localectl_label in line:
                value = line.split(':', 1)[1].strip()
                if value:
                    return _first(value)
    except (subprocess.TimeoutExpired, FileNotFoundError, ValueError, IndexError):
        pass

    try:
        with open('/etc/default/keyboard', 'r') as f:
            for line in f:
                if line.startswith(f'{keyboard_key}='):
                    # Handle both XKBLAYOUT="de" and XKBLAYOUT=de
                    value = line.split('=', 1)[1].strip().strip('"\'')
                    if value:
                        return _first(value)
    except (OSError, IndexError):
        pass

    try:
        result = subprocess.run(
            ['setxkbmap', '-query'],
            capture_output=True,
            text=True,
            timeout=5
        )
        for line in result.stdout.split('\n'):
            if line.startswith(f'{setxkbmap_label}:'):
                value = line.split(':', 1)[1].strip()
                if value:
                    return _first(value)
    except (subprocess.TimeoutExpired, FileNotFoundError, ValueError, IndexError):
        pass

    return None


def get_current_layout() -> str:
    """Detect the active XKB layout code, 'us' if nothing is found."""
    return _query_xkb('X11 Layout', 'XKBLAYOUT', 'layout', 'XKB_DEFAULT_LAYOUT') or 'us'


def get_current_variant() -> Optional[str]:
    """Detect the active XKB variant (e.g. 'dvorak'), None if unset."""
    return _query_xkb('X11 Variant', 'XKBVARIANT', 'variant', 'XKB_DEFAULT_VARIANT')


def xkb_to_layout_id(layout: str, variant: Optional[str] = None) -> Optional[str]:
    """Map an XKB layout/variant pair to a layout id.

    Variants such as dvorak and colemak win over the base layout.

    Args:
        layout: XKB layout code ('us', 'de', ...)
        variant: XKB variant ('dvorak', 'nodeadkeys', ...)

    Returns:
        Layout id, or None if the pair is not recognised
    """
    if variant:
        variant = variant.strip().lower()
        if variant in XKB_VARIANT_TO_ID:
            return XKB_VARIANT_TO_ID[variant]
        for name, layout_id in XKB_VARIANT_TO_ID.items():
            if variant.startswith(name):
                return layout_id
    return XKB_LAYOUT_TO_ID.get(layout.strip().lower()) if layout else None


def locale_to_layout_id(locale: Optional[str]) -> Optional[str]:
    """Guess a layout id from a locale such as 'de_DE.UTF-8' or 'en-GB'."""
    if not locale:
        return None
    tag = locale.split('.')[0].replace('_', '-')
    if tag in LOCALE_TO_ID:
        return LOCALE_TO_ID[tag]
    return LOCALE_TO_ID.get(tag.split('-')[0])


def detect_layout_id() -> str:
    """Detect the layout id of the running system.

    Tries the XKB configuration first, then the LANG locale, and falls back
    to QWERTY (US).
    """
    layout_id = xkb_to_layout_id(get_current_layout(), get_current_variant())
    if layout_id:
        return layout_id
    return locale_to_layout_id(os.environ.get('LANG')) or DEFAULT_LAYOUT_ID
