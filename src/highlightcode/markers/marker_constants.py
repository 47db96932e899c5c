"""Marker format constants for in-source bookmark comments.

A bookmark is stored in the document as two comment lines:

    <start> hl-code "<name>" <color> <end>
    ... highlighted lines ...
    <start> /hl-code "<name>" <color> <end>

Used by markers/codec.py (encode, decode_all) and sync/planner.py.
"""

from __future__ import annotations

START_TAG = "hl-code"
END_TAG = "/hl-code"
MARKER_TEMPLATE = '{start} {tag} "{name}" {color} {end}'

# Characters that cannot appear in a name without breaking the marker line.
FORBIDDEN_NAME_CHARS = frozenset('"\r\n')
