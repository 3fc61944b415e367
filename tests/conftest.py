# tests/conftest.py
"""Shared pytest fixtures for Portfolio Monitor tests."""

import os
from datetime import date

import pandas as pd
import pytest
from sqlalchemy import Column, Date, Float, MetaData, String, Table, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from src.core.data_service import PortfolioDataService
from src.core.models import FilterSelection, TimeSeriesDataset

# Run Qt headless so widget tests work without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

SERIES_TABLE = "vw_CompositePortfolio_MovingAverage"


@pytest.fixture
def example_dataset() -> TimeSeriesDataset:
    """Two-point dataset with known bounds (0.7, 1.0)."""
    return TimeSeriesDataset.build(
        [
            (date(2024, 1, 1), 0.95, 0.93),
            (date(2024, 1, 8), 0.78, 0.85),
        ]
    )


@pytest.fixture
def long_dataset() -> TimeSeriesDataset:
    """Three years of monthly points between 0.72 and 0.96."""
    rows = []
    for i in range(37):
        year = 2021 + i // 12
        month = i % 12 + 1
        composite = 0.72 + (i % 13) * 0.02
        rows.append((date(year, month, 1), composite, composite - 0.01))
    return TimeSeriesDataset.build(rows)


@pytest.fixture
def tax_free_selection() -> FilterSelection:
    """Selection for Tax Free, 2022-01-01 to 2024-01-01."""
    return FilterSelection("Tax Free", date(2022, 1, 1), date(2024, 1, 1))


@pytest.fixture
def sqlite_engine() -> Engine:
    """In-memory SQLite database holding the portfolio view as a table."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata = MetaData()
    table = Table(
        SERIES_TABLE,
        metadata,
        Column("TaxType", String),
        Column("Closing", Date),
        Column("CompositePercent", Float),
        Column("MovingAverage_2Week_Percent", Float),
    )
    metadata.create_all(engine)

    rows = [
        ("Tax Free", date(2024, 1, 8), 78.0, 85.0),
        ("Tax Free", date(2024, 1, 1), 95.0, 93.0),
        ("Tax Free", date(2023, 12, 25), 91.0, None),
        ("Tax Deferred", date(2024, 1, 1), 88.0, 87.0),
        ("Taxable", date(2024, 1, 1), 101.0, 99.5),
    ]
    with engine.begin() as conn:
        conn.execute(
            table.insert(),
            [
                {
                    "TaxType": tax_type,
                    "Closing": closing,
                    "CompositePercent": composite,
                    "MovingAverage_2Week_Percent": moving_average,
                }
                for tax_type, closing, composite, moving_average in rows
            ],
        )
    return engine


@pytest.fixture
def data_service(sqlite_engine: Engine) -> PortfolioDataService:
    """Data service over the in-memory database."""
    return PortfolioDataService(
        sqlite_engine,
        series_view=SERIES_TABLE,
        strategy_query="SELECT 'Guardrails'",
    )


class FakeDataService:
    """In-memory stand-in for PortfolioDataService."""

    def __init__(self, frames=None, strategy="Guardrails", categories=None):
        self.frames = frames or {}
        self.strategy = strategy
        self.categories = categories if categories is not None else ["Tax Free"]
        self.series_error = None
        self.strategy_error = None
        self.category_error = None
        self.calls = []

    def fetch_series(self, category, start, end):
        self.calls.append((category, start, end))
        if self.series_error is not None:
            raise self.series_error
        return self.frames.get(
            category,
            pd.DataFrame(
                columns=["Closing", "CompositePercent", "MovingAverage_2Week_Percent"]
            ),
        )

    def fetch_strategy_label(self):
        if self.strategy_error is not None:
            raise self.strategy_error
        return self.strategy

    def list_categories(self):
        if self.category_error is not None:
            raise self.category_error
        return list(self.categories)


@pytest.fixture
def fake_service() -> FakeDataService:
    """Fake service with one week of Tax Free data."""
    frame = pd.DataFrame(
        {
            "Closing": pd.to_datetime(["2024-01-01", "2024-01-08"]),
            "CompositePercent": [0.95, 0.78],
            "MovingAverage_2Week_Percent": [0.93, 0.85],
        }
    )
    return FakeDataService(
        frames={"Tax Free": frame},
        categories=["Tax Deferred", "Tax Free", "Taxable"],
    )
