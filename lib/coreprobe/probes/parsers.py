"""Helpers for reducing platform tool output to key/value pairs."""

from typing import Dict, List, Tuple


def parse_pairs(text: str, sep: str = ':') -> List[Tuple[str, str]]:
    """Split each line of the text on the first separator, and return the
    stripped (key, value) pairs in order. Lines without the separator
    (blank lines, section headers with nothing after them) are skipped."""

    pairs = []
    for line in text.splitlines():
        if sep not in line:
            continue

        key, value = line.split(sep, 1)
        key = key.strip()
        if not key:
            continue

        pairs.append((key, value.strip()))

    return pairs


def parse_dict(text: str, sep: str = ':') -> Dict[str, str]:
    """As per parse_pairs, but as a dict. Later keys override earlier ones."""

    return dict(parse_pairs(text, sep))
