"""Shared fixtures for sqlcompose tests.

Every driver fixture injects a fresh label generator with the ``t`` prefix,
so generated labels are predictable: ``:_t1_``, ``:_t2_``, ...
"""

from __future__ import annotations

import os

import pytest

from sqlcompose import LabelGenerator, reset_dialects
from sqlcompose.dialects.mysql import MYSQL, MySQLDriver
from sqlcompose.dialects.postgresql import POSTGRESQL, PostgreSQLDriver


@pytest.fixture()
def labels() -> LabelGenerator:
    return LabelGenerator(prefix="t")


@pytest.fixture()
def pg(labels: LabelGenerator) -> PostgreSQLDriver:
    return PostgreSQLDriver(labels=labels)


@pytest.fixture()
def my(labels: LabelGenerator) -> MySQLDriver:
    return MySQLDriver(labels=labels)


@pytest.fixture(params=["postgresql", "mysql"])
def driver(request, labels):
    """Run a test once per dialect."""
    cls = PostgreSQLDriver if request.param == "postgresql" else MySQLDriver
    return cls(labels=labels)


@pytest.fixture()
def pg_rules():
    return POSTGRESQL


@pytest.fixture()
def my_rules():
    return MYSQL


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep SQLCOMPOSE_* variables from the outer environment out of tests."""
    for key in list(os.environ):
        if key.startswith("SQLCOMPOSE_"):
            monkeypatch.delenv(key, raising=False)
    yield
    reset_dialects()
