"""Determine the platform key for the running host."""

import re
import sys

# sys.platform values that don't map directly to a platform key.
PLATFORM_ALIASES = {
    'win32': 'windows-nt',
    'cli': 'windows-nt',
}

VERSION_SUFFIX_RE = re.compile(r'\d+(\.\d+)*$')


def normalize(platform: str) -> str:
    """Turn a sys.platform style string into a platform key. Version
    suffixes are removed ('freebsd13' -> 'freebsd') and Windows becomes
    'windows-nt'."""

    platform = platform.strip().lower()
    platform = PLATFORM_ALIASES.get(platform, platform)

    stripped = VERSION_SUFFIX_RE.sub('', platform)
    # Keys that are nothing but a version number are left alone.
    return stripped or platform


def get_platform_key(override=None) -> str:
    """Return the platform key for this host.

    :param str override: Use this key instead of the detected one. It is
        used as given, so it must match a registered key exactly.
    """

    if override:
        return override

    return normalize(sys.platform)
