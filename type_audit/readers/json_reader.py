"""
JSON record reader for JSON Lines and JSON array files.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from type_audit.core.errors import RecordReadError
from type_audit.observability.logger import get_logger

logger = get_logger(__name__)

SUFFIX_FORMATS = {
    ".jsonl": "jsonl",
    ".ndjson": "jsonl",
    ".json": "json",
}


class JsonRecordReader:
    """
    Streams records from a JSON file, one record per iteration.

    JSON Lines files are decoded lazily line by line. JSON files may hold
    either a single object or an array of records.
    """

    SUPPORTED_FORMATS = ("jsonl", "json")

    def __init__(
        self,
        file_path: str | Path,
        file_format: str | None = None,
        encoding: str = "utf-8",
    ):
        """
        Initialize JSON reader.

        Args:
            file_path: Path to the JSON or JSON Lines file
            file_format: "jsonl" or "json" (default: from file extension)
            encoding: Text encoding of the file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the format is unsupported
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"Input file not found: {file_path}")

        self.file_format = (file_format or SUFFIX_FORMATS.get(self.file_path.suffix.lower(), "")).lower()
        if self.file_format not in self.SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported JSON format for {self.file_path}: '{self.file_format}'")

        self.encoding = encoding

    def __iter__(self) -> Iterator[Any]:
        if self.file_format == "jsonl":
            return self._iter_lines()
        return self._iter_document()

    def _iter_lines(self) -> Iterator[Any]:
        with open(self.file_path, encoding=self.encoding) as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError as e:
                    raise RecordReadError(str(self.file_path), f"Malformed JSON: {e.msg}", line_number) from e

    def _iter_document(self) -> Iterator[Any]:
        with open(self.file_path, encoding=self.encoding) as f:
            try:
                document = json.load(f)
            except json.JSONDecodeError as e:
                raise RecordReadError(str(self.file_path), f"Malformed JSON: {e.msg}", e.lineno) from e

        if isinstance(document, dict):
            yield document
        elif isinstance(document, list):
            logger.debug(f"Read {len(document)} records from {self.file_path}")
            yield from document
        else:
            raise RecordReadError(
                str(self.file_path),
                f"Expected a JSON object or array, got {type(document).__name__}",
            )
