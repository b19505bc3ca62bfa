"""
Spark DataFrame record reader.

Loads CSV, JSON or Parquet files with Spark and streams the resulting rows
to the driver as pyspark Row records.
"""

from collections.abc import Iterator
from pathlib import Path

from pyspark.sql import DataFrame, Row, SparkSession

from type_audit.observability.logger import get_logger

logger = get_logger(__name__)

SPARK_FORMATS = ("csv", "json", "parquet")

# Spark reads JSON Lines with its json source
SPARK_SUFFIX_FORMATS = {
    ".csv": "csv",
    ".parquet": "parquet",
    ".json": "json",
    ".jsonl": "json",
    ".ndjson": "json",
}


def resolve_spark_format(file_path: str | Path, file_format: str | None = None) -> str:
    """
    Pick the Spark data source for a file.

    Args:
        file_path: Path to file
        file_format: Explicit format; "jsonl" is read as "json"

    Returns:
        One of SPARK_FORMATS

    Raises:
        ValueError: If the format is unsupported or cannot be derived
    """
    if file_format:
        resolved = "json" if file_format.lower() == "jsonl" else file_format.lower()
    else:
        resolved = SPARK_SUFFIX_FORMATS.get(Path(file_path).suffix.lower(), "")

    if resolved not in SPARK_FORMATS:
        raise ValueError(f"Unsupported file format for {file_path}: '{file_format or Path(file_path).suffix}'")
    return resolved


def create_spark_session(app_name: str = "TypeAudit") -> SparkSession:
    """
    Create a local Spark session.

    Args:
        app_name: Application name

    Returns:
        SparkSession
    """
    spark = SparkSession.builder \
        .appName(app_name) \
        .master("local[*]") \
        .config("spark.ui.enabled", "false") \
        .getOrCreate()

    return spark


def load_dataframe(
    spark: SparkSession,
    file_path: str | Path,
    file_format: str = "csv",
    header: bool = True,
    delimiter: str = ",",
) -> DataFrame:
    """
    Read a file into a Spark DataFrame.

    Args:
        spark: Active Spark session
        file_path: Path to file
        file_format: Format (csv, json, parquet)
        header: Whether a CSV file has a header row
        delimiter: CSV field delimiter

    Returns:
        Spark DataFrame

    Raises:
        ValueError: If file format is unsupported
    """
    file_format = file_format.lower()
    path = str(file_path)

    if file_format == "csv":
        return spark.read \
            .option("header", str(header).lower()) \
            .option("delimiter", delimiter) \
            .option("inferSchema", "true") \
            .option("mode", "PERMISSIVE") \
            .csv(path)
    elif file_format == "json":
        return spark.read.json(path)
    elif file_format == "parquet":
        return spark.read.parquet(path)
    else:
        raise ValueError(f"Unsupported file format: {file_format}")


class DataFrameRecordReader:
    """
    Streams the rows of a DataFrame as Row records.

    Rows are pulled partition by partition with toLocalIterator(), so the
    driver never holds the whole DataFrame at once.
    """

    def __init__(self, df: DataFrame, columns: list[str] | None = None):
        """
        Initialize DataFrame reader.

        Args:
            df: Input DataFrame
            columns: Optional subset of columns to fetch
        """
        self.df = df.select(*columns) if columns else df

    def __iter__(self) -> Iterator[Row]:
        logger.debug(f"Streaming rows of DataFrame with columns {self.df.columns}")
        return self.df.toLocalIterator()
