"""
Integration tests for auditing Spark DataFrames.
"""

from datetime import date

import pytest
from pyspark.sql import Row

from type_audit.core.models import NULL_TYPE_LABEL
from type_audit.core.schema import aggregate_types
from type_audit.readers import DataFrameRecordReader, load_dataframe


@pytest.mark.integration
def test_audit_dataframe_rows(spark_session):
    """Rows of a DataFrame are audited column by column"""
    df = spark_session.createDataFrame([
        Row(transaction_id="TXN001", amount=99.99, booked=date(2024, 3, 1)),
        Row(transaction_id="TXN002", amount=None, booked=date(2024, 3, 2)),
    ])

    report = aggregate_types(DataFrameRecordReader(df))

    assert report.names() == ["transaction_id", "amount", "booked"]
    assert report.get("transaction_id") == ["str"]
    assert report.get("amount") == ["float", NULL_TYPE_LABEL]
    assert report.get("booked") == ["datetime.date"]
    assert report.records_observed == 2


@pytest.mark.integration
def test_column_subset(spark_session):
    """Only the selected columns are fetched"""
    df = spark_session.createDataFrame([Row(a=1, b="x", c=2.0)])

    report = aggregate_types(DataFrameRecordReader(df, columns=["c", "a"]))

    assert report.names() == ["c", "a"]


@pytest.mark.integration
def test_load_csv_with_inferred_schema(spark_session, tmp_path):
    """CSV columns arrive with Spark-inferred types"""
    path = tmp_path / "sales.csv"
    path.write_text("transaction_id,amount\nTXN001,99.99\nTXN002,\n")

    df = load_dataframe(spark_session, path, file_format="csv")
    report = aggregate_types(DataFrameRecordReader(df))

    assert report.get("transaction_id") == ["str"]
    assert report.get("amount") == ["float", NULL_TYPE_LABEL]


@pytest.mark.integration
def test_load_unsupported_format(spark_session, tmp_path):
    with pytest.raises(ValueError):
        load_dataframe(spark_session, tmp_path / "data.xml", file_format="xml")
