"""
Pytest configuration and fixtures for type-audit tests

This module provides shared fixtures for unit and integration tests.
"""
import json
from datetime import datetime
from typing import Generator

import pytest
from pyspark.sql import SparkSession


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require a local Spark session"
    )


# =======================
# SPARK FIXTURES
# =======================

@pytest.fixture(scope="session")
def spark_session() -> Generator[SparkSession, None, None]:
    """
    Create a Spark session for testing with local mode

    Yields:
        SparkSession configured for local testing
    """
    spark = (
        SparkSession.builder
        .appName("type-audit-test")
        .master("local[1]")
        .config("spark.sql.shuffle.partitions", "1")
        .config("spark.driver.memory", "1g")
        .config("spark.ui.enabled", "false")  # Disable UI for tests
        .getOrCreate()
    )

    # Set log level to WARN to reduce test output noise
    spark.sparkContext.setLogLevel("WARN")

    yield spark

    spark.stop()


# =======================
# RECORD FIXTURES
# =======================

@pytest.fixture
def scenario_records() -> list[dict]:
    """Two records whose prop2 switches from a datetime to an int"""
    return [
        {"prop1": "har", "prop2": datetime(2024, 1, 15, 9, 30)},
        {"prop1": "bar", "prop2": 2},
    ]


@pytest.fixture
def dirty_records() -> list[dict]:
    """Semi-structured records with missing, null and mixed-type fields"""
    return [
        {"transaction_id": "TXN001", "amount": 99.99, "currency": "USD"},
        {"transaction_id": "TXN002", "amount": "150.50", "notes": None},
        {"transaction_id": 3, "amount": 250, "currency": "EUR", "tags": ["refund"]},
        {"transaction_id": "TXN004", "amount": None},
    ]


@pytest.fixture
def jsonl_file(tmp_path, dirty_records) -> str:
    """
    Write dirty_records as a JSON Lines file

    Returns:
        Path to the file
    """
    path = tmp_path / "transactions.jsonl"
    path.write_text("\n".join(json.dumps(record) for record in dirty_records) + "\n")
    return str(path)
