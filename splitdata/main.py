import asyncio
from pathlib import Path
from typing import Optional

import click

from .engine import SplitEngine, list_sections
from .exceptions import SplitError


def check_input(file_path: str) -> Path:
    path = Path(file_path)
    if not path.is_file():
        raise SystemExit(f"Input file {file_path} does not exist")
    return path


@click.group()
def cli():
    pass


@cli.command()
@click.argument("file_path")
@click.option(
    "--output-dir",
    default=None,
    help="Directory to write section files to [defaults to tables/ next to the input]",
)
@click.option(
    "--buffer-size",
    default=None,
    type=int,
    help="Number of bytes to read from the input at a time",
)
def split(file_path: str, output_dir: Optional[str], buffer_size: Optional[int]) -> None:
    """
    Split a SQL dump into one file per table data section.

    Lines before the first `-- Data for Name:` comment are written to
    `_schema.sql`, and each table's data to `<table>.sql`.
    """
    path = check_input(file_path)
    try:
        engine = SplitEngine(
            path,
            Path(output_dir) if output_dir is not None else None,
            buffer_size,
        )
        result = asyncio.run(engine.run())
    except (SplitError, OSError) as e:
        raise SystemExit(f"Error: {e}") from e
    tables = len(result["sections"]) - 1
    print(f"Split {tables} sections into {result['output_dir']}")
    print(f"  Lines: {result['lines']}")
    print(f"  Bytes: {result['bytes']}")


@cli.command()
@click.argument("file_path")
@click.option(
    "--buffer-size",
    default=None,
    type=int,
    help="Number of bytes to read from the input at a time",
)
def sections(file_path: str, buffer_size: Optional[int]) -> None:
    """
    List the table data sections of a SQL dump without writing any files.
    """
    path = check_input(file_path)
    try:
        names = asyncio.run(list_sections(path, buffer_size))
    except (SplitError, OSError) as e:
        raise SystemExit(f"Error: {e}") from e
    for name in names:
        print(name)


if __name__ == "__main__":
    cli()
