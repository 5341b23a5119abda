import asyncio
import io
import sys
from pathlib import Path
from typing import AsyncIterator, BinaryIO, Optional

from .marker import section_name
from .scanner import NEWLINE, LineView, ReadBuffer
from .types import SectionResult, SplitResult
from .utils import get_buffer_size, get_output_dir, get_section_file_name


async def read_lines(
    stream: BinaryIO, buffer_size: int
) -> AsyncIterator[tuple[int, LineView]]:
    """
    Yield (line_number, line) for every line of `stream`, reading it
    `buffer_size` bytes at a time.

    Each line is only valid until the next one is requested. A final line
    without a terminator is still yielded.
    """
    buffer = ReadBuffer()
    line_number = 0
    while True:
        data = await asyncio.to_thread(stream.read, buffer_size)
        if not data:
            break
        buffer.append(data)
        while True:
            line = buffer.next_line()
            if line is None:
                break
            line_number += 1
            yield line_number, line
    remainder = buffer.remainder()
    if remainder is not None:
        yield line_number + 1, remainder


class ActiveOutput:
    """
    The single output file currently receiving lines.

    Lines are queued as borrowed segments and handed to a worker thread once
    `buffer_size` bytes are pending. `replace` closes the current file before
    opening the next one, so at most one file is open at a time.
    """

    def __init__(self, output_dir: Path, buffer_size: int):
        self.output_dir = output_dir
        self.buffer_size = buffer_size
        self.section = None  # type: Optional[SectionResult]
        self._stream = None  # type: Optional[BinaryIO]
        self._pending = []  # type: list[bytes | memoryview]
        self._pending_size = 0

    @property
    def file_name(self) -> Optional[str]:
        if self.section is None:
            return None
        return Path(self.section["path"]).name

    async def replace(self, name: Optional[str]) -> SectionResult:
        await self.close()
        file_name = get_section_file_name(name)
        path = self.output_dir / file_name
        print(f"Writing to {file_name}", flush=True)
        self._stream = await asyncio.to_thread(
            open,
            path,
            "wb",
            buffering=max(self.buffer_size, io.DEFAULT_BUFFER_SIZE),
        )
        self.section = {"name": name, "path": str(path), "lines": 0, "bytes": 0}
        return self.section

    async def write_line(self, line: LineView) -> None:
        if self._stream is None:
            raise RuntimeError("No output file is open")
        self._pending.extend(line.segments)
        self._pending.append(NEWLINE)
        size = len(line) + len(NEWLINE)
        self._pending_size += size
        self.section["lines"] += 1
        self.section["bytes"] += size
        if self._pending_size >= self.buffer_size:
            await self.drain()

    async def drain(self) -> None:
        pending, self._pending = self._pending, []
        self._pending_size = 0
        if pending:
            await asyncio.to_thread(self._stream.writelines, pending)

    async def close(self) -> None:
        if self._stream is None:
            return
        try:
            await self.drain()
            await asyncio.to_thread(self._stream.flush)
        finally:
            stream, self._stream = self._stream, None
            self._pending = []
            self._pending_size = 0
            stream.close()


class SplitEngine:
    """
    Splits a plain SQL dump into one file per table data section.

    Everything before the first `-- Data for Name: <table>; ...` comment goes
    to `_schema.sql`; every marker line, and all lines after it up to the
    next marker, go to `<table>.sql`. Files are written to the output
    directory, which defaults to a `tables` directory next to the input.
    """

    def __init__(
        self,
        input_path: Path,
        output_dir: Optional[Path] = None,
        buffer_size: Optional[int] = None,
    ):
        self.input_path = Path(input_path)
        self.output_dir = (
            Path(output_dir)
            if output_dir is not None
            else get_output_dir(self.input_path)
        )
        self.buffer_size = get_buffer_size(buffer_size)
        self.output = ActiveOutput(self.output_dir, self.buffer_size)

    async def run(self) -> SplitResult:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        sections = [await self.output.replace(None)]
        try:
            with self.input_path.open("rb", buffering=0) as inp:
                async for line_number, line in read_lines(inp, self.buffer_size):
                    name = section_name(line, line_number)
                    if name is not None:
                        sections.append(await self.output.replace(name))
                    await self.output.write_line(line)
        except BaseException:
            try:
                await self.output.close()
            except OSError as e:
                print(
                    f"Failed to close {self.output.file_name}: {e}",
                    file=sys.stderr,
                    flush=True,
                )
            raise
        await self.output.close()
        return {
            "output_dir": str(self.output_dir),
            "sections": sections,
            "lines": sum(section["lines"] for section in sections),
            "bytes": sum(section["bytes"] for section in sections),
        }


async def list_sections(input_path: Path, buffer_size: Optional[int] = None) -> list[str]:
    buffer_size = get_buffer_size(buffer_size)
    names = []
    with Path(input_path).open("rb", buffering=0) as inp:
        async for line_number, line in read_lines(inp, buffer_size):
            name = section_name(line, line_number)
            if name is not None:
                names.append(name)
    return names
