"""Marker codec for single-line stash descriptions.

A stash description is stored as one reflog line, so newlines, carriage
returns and tabs cannot survive it. Before a commit message becomes a
stash description it is encoded into bracketed markers:

    newline         ->  ::NL::
    carriage return ->  ::CR::
    tab             ->  ::TAB::
    double quote    ->  ::DQ::

Text that already looks like a marker (``::WORD::``) is escaped first by
doubling its delimiters (``::NL::`` -> ``::::NL::::``) so it decodes back
to itself instead of to a control character.

A literal colon that would fuse with a following marker into something
decodable is written as ``::CL::``. This only happens when colons sit
directly against a control character or a marker, e.g. ``"::NL\\n"``,
which would otherwise encode to the same text as ``"\\nNL::"``.

Decoding is a single left-to-right scan that recognises, at each
position, an escaped marker or a token; everything else is copied
through. ``encode`` guarantees the scan sees exactly the units it wrote,
so ``decode(encode(m)) == m`` for every string.
"""

import re
import string
from itertools import islice
from typing import Dict, Iterable, List

TOKEN_TABLE_VERSION = 1

# Order matters only for documentation; each entry maps one character.
TOKENS: Dict[str, str] = {
    "\n": "::NL::",
    "\r": "::CR::",
    "\t": "::TAB::",
    '"': "::DQ::",
}

COLON_TOKEN = "::CL::"

_CHARS_BY_NAME: Dict[str, str] = {
    token.strip(":"): char for char, token in TOKENS.items()
}
_CHARS_BY_NAME[COLON_TOKEN.strip(":")] = ":"

# Marker-shaped text in a raw message
_MARKER_SHAPE = re.compile(r"::([A-Z]+)::")

# What decode() recognises at a given position, in priority order
_DECODE_PATTERN = re.compile(
    r"::::([A-Z]+)::::|::(" + "|".join(sorted(_CHARS_BY_NAME)) + r")::"
)

_NAME_CHARS = frozenset(string.ascii_uppercase)


def _split_units(message: str) -> List[str]:
    """Split a raw message into encoded units, left to right."""
    units = []
    i = 0
    while i < len(message):
        marker = _MARKER_SHAPE.match(message, i)
        if marker:
            units.append("::::%s::::" % marker.group(1))
            i = marker.end()
            continue
        char = message[i]
        units.append(TOKENS.get(char, char))
        i += 1
    return units


def _marker_prefix(parts: Iterable[str]) -> str:
    """Leading text of ``parts`` that a colon put in front could turn into a marker."""
    chars = (c for part in parts for c in part)
    window = list(islice(chars, 3))
    if window == [":", ":", ":"]:
        # "::::NAME::::" has no length limit; read through the name
        for c in chars:
            window.append(c)
            if c not in _NAME_CHARS:
                break
    window.extend(islice(chars, 3))
    return "".join(window)


def encode(message: str) -> str:
    """Encode a message so it fits in a single-line stash description."""
    parts: List[str] = []
    # Right to left, so each literal colon can be checked against what follows
    for unit in reversed(_split_units(message)):
        if unit == ":" and _DECODE_PATTERN.match(":" + _marker_prefix(reversed(parts))):
            unit = COLON_TOKEN
        parts.append(unit)
    return "".join(reversed(parts))


def _decode_unit(match: "re.Match") -> str:
    escaped = match.group(1)
    if escaped is not None:
        return "::%s::" % escaped
    return _CHARS_BY_NAME[match.group(2)]


def decode(text: str) -> str:
    """Reverse encode()."""
    return _DECODE_PATTERN.sub(_decode_unit, text)
