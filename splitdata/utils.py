import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

load_dotenv()

# matches the read buffer of the original table splitter
DEFAULT_BUFFER_SIZE = 256 * 1024
DEFAULT_TABLES_DIR = "tables"
SCHEMA_FILE_NAME = "_schema.sql"


def get_buffer_size(value: Optional[int] = None) -> int:
    """
    Resolve the input read size, preferring an explicit value over the
    SPLITDATA_BUFFER_SIZE environment variable.
    """
    if value is None:
        raw = os.environ.get("SPLITDATA_BUFFER_SIZE", "")
        if not raw:
            return DEFAULT_BUFFER_SIZE
        try:
            value = int(raw)
        except ValueError:
            raise ConfigError(f"Invalid SPLITDATA_BUFFER_SIZE: {raw}") from None
    if value <= 0:
        raise ConfigError(f"Buffer size must be positive, got {value}")
    return value


def get_output_dir(input_path: Path) -> Path:
    tables_dir = os.environ.get("SPLITDATA_TABLES_DIR", "") or DEFAULT_TABLES_DIR
    return Path(input_path).resolve().parent / tables_dir


def get_section_file_name(name: Optional[str]) -> str:
    if name is None:
        return SCHEMA_FILE_NAME
    return f"{name}.sql"
