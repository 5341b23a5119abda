from typing import Optional, TypedDict


class SectionResult(TypedDict):
    # None for the preamble written before the first marker
    name: Optional[str]
    path: str
    lines: int
    bytes: int


class SplitResult(TypedDict):
    output_dir: str
    sections: list[SectionResult]
    lines: int
    bytes: int
