from typing import Optional

from .exceptions import MarkerFormatError
from .scanner import LineView

# `-- Data for Name: users; Type: TABLE DATA; Schema: public; Owner: postgres`
MARKER_TAG = b"-- Data for Name: "
NAME_TERMINATOR = b";"


def parse_marker(line: bytes, line_number: Optional[int] = None) -> Optional[str]:
    """
    Return the section name if `line` announces a new section, else None.

    Raises MarkerFormatError if the line carries the marker tag but the name
    is not terminated by `;`.
    """
    if not line.startswith(MARKER_TAG):
        return None
    end = line.find(NAME_TERMINATOR, len(MARKER_TAG))
    if end == -1:
        raise MarkerFormatError(line, line_number)
    return line[len(MARKER_TAG) : end].decode("utf-8")


def section_name(line: LineView, line_number: Optional[int] = None) -> Optional[str]:
    # only copy lines that actually carry the tag
    if not line.startswith(MARKER_TAG):
        return None
    return parse_marker(line.tobytes(), line_number)
