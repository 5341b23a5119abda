import pytest

from splitdata.exceptions import MarkerFormatError
from splitdata.marker import parse_marker, section_name
from splitdata.scanner import LineView


@pytest.mark.parametrize("line, expected", [
    (b"-- Data for Name: users; Type: TABLE DATA; Schema: public; Owner: postgres", "users"),
    (b"-- Data for Name: users;", "users"),
    (b"-- Data for Name: ;", ""),
    (b"-- Data for Name: a;b;c", "a"),
    ("-- Data for Name: café; Type: TABLE DATA".encode("utf-8"), "café"),
    (b"-- Data for Name: users\r;", "users\r"),
    (b"-- Name: users; Type: TABLE; Schema: public; Owner: postgres", None),
    (b"-- data for name: users;", None),
    (b" -- Data for Name: users;", None),
    (b"COPY public.users (id, name) FROM stdin;", None),
    (b"", None),
])
def test_parse_marker(line, expected):
    assert parse_marker(line) == expected


@pytest.mark.parametrize("line", [
    b"-- Data for Name: users",
    b"-- Data for Name: ",
    b"-- Data for Name: users\r",
])
def test_parse_marker_missing_terminator(line):
    with pytest.raises(MarkerFormatError):
        parse_marker(line)


def test_section_name_single_segment():
    view = LineView([memoryview(b"-- Data for Name: orders; Type: TABLE DATA")])
    assert section_name(view) == "orders"


def test_section_name_multiple_segments():
    view = LineView([
        memoryview(b"-- Data for "),
        memoryview(b"Name: ord"),
        memoryview(b"ers; Type: TABLE DATA"),
    ])
    assert section_name(view) == "orders"


def test_section_name_short_line():
    assert section_name(LineView([memoryview(b"-- Data")])) is None


def test_section_name_reports_line_number():
    view = LineView([memoryview(b"-- Data for Name: users")])
    with pytest.raises(MarkerFormatError) as exc_info:
        section_name(view, 42)
    assert exc_info.value.line_number == 42
    assert exc_info.value.line == "-- Data for Name: users"
    assert "line 42" in str(exc_info.value)


def test_section_name_does_not_copy_ordinary_lines(monkeypatch):
    def fail_tobytes(self):
        raise AssertionError("ordinary line was materialized")

    monkeypatch.setattr(LineView, "tobytes", fail_tobytes)
    view = LineView([memoryview(b"1\t" + b"x" * 100), memoryview(b"y" * 100)])
    assert section_name(view) is None
    view = LineView([memoryview(b"-- Data for"), memoryview(b" Nome: t;")])
    assert section_name(view) is None
