"""
Record sources for type auditing.
"""

from pathlib import Path
from collections.abc import Iterator
from typing import Any

from .dataframe_reader import (
    DataFrameRecordReader,
    create_spark_session,
    load_dataframe,
    resolve_spark_format,
)
from .json_reader import SUFFIX_FORMATS, JsonRecordReader


def read_records(file_path: str | Path, file_format: str | None = None) -> Iterator[Any]:
    """
    Stream records from a JSON or JSON Lines file.

    Args:
        file_path: Path to the input file
        file_format: "jsonl" or "json" (default: from file extension)

    Returns:
        Iterator over records

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported
    """
    return iter(JsonRecordReader(file_path, file_format=file_format))


__all__ = [
    "DataFrameRecordReader",
    "JsonRecordReader",
    "SUFFIX_FORMATS",
    "create_spark_session",
    "load_dataframe",
    "read_records",
    "resolve_spark_format",
]
