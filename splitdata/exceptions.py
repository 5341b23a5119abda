from typing import Optional


class SplitError(Exception):
    pass


class ConfigError(SplitError):
    pass


class MarkerFormatError(SplitError):
    """
    Raised when a line starts with the section marker tag but has no `;`
    terminating the section name.
    """

    def __init__(self, line: bytes, line_number: Optional[int] = None):
        self.line = line.decode("utf-8", errors="replace")
        self.line_number = line_number
        location = f" on line {line_number}" if line_number is not None else ""
        super().__init__(f"Malformed section marker{location}: {self.line!r}")
