"""Portfolio database access.

Reads the composite/moving-average series and the current withdrawal
strategy from the portfolio database through SQLAlchemy.
"""

from __future__ import annotations

import logging
from datetime import date

import pandas as pd
from sqlalchemy import Date, String, bindparam, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from src.core import config
from src.core.exceptions import DataFetchError
from src.core.models import COMPOSITE_COLUMN, DATE_COLUMN, MOVING_AVERAGE_COLUMN

logger = logging.getLogger(__name__)


class PortfolioDataService:
    """Queries the portfolio view and strategy procedure.

    Attributes:
        series_view: Fully qualified name of the composite/moving-average view.
        strategy_query: SQL returning the strategy name as a single scalar.
    """

    def __init__(
        self,
        engine: Engine,
        series_view: str = config.SERIES_VIEW,
        strategy_query: str = config.STRATEGY_QUERY,
    ) -> None:
        """Initialize the service.

        Args:
            engine: SQLAlchemy engine for the portfolio database.
            series_view: View holding TaxType, Closing, CompositePercent and
                MovingAverage_2Week_Percent.
            strategy_query: Statement returning the strategy name.
        """
        self._engine = engine
        self.series_view = series_view
        self.strategy_query = strategy_query

    def fetch_series(self, category: str, start: date, end: date) -> pd.DataFrame:
        """Fetch the series for one tax type and date range.

        Percent columns are divided by 100 so values are fractions.

        Args:
            category: Tax type to filter on.
            start: First closing date (inclusive).
            end: Last closing date (inclusive).

        Returns:
            DataFrame with Closing, CompositePercent and
            MovingAverage_2Week_Percent, ascending by Closing.

        Raises:
            DataFetchError: If the query fails.
        """
        query = text(
            f"""
            SELECT Closing,
                   (CompositePercent / 100.0) AS {COMPOSITE_COLUMN},
                   (MovingAverage_2Week_Percent / 100.0) AS {MOVING_AVERAGE_COLUMN}
            FROM {self.series_view}
            WHERE TaxType = :tax_type
              AND Closing >= :start_date
              AND Closing <= :end_date
            ORDER BY Closing ASC
            """
        ).bindparams(
            bindparam("tax_type", type_=String),
            bindparam("start_date", type_=Date),
            bindparam("end_date", type_=Date),
        )
        params = {"tax_type": category, "start_date": start, "end_date": end}

        try:
            with self._engine.connect() as conn:
                df = pd.read_sql(query, conn, params=params, parse_dates=[DATE_COLUMN])
        except SQLAlchemyError as e:
            logger.error("Series query failed for %s: %s", category, e)
            raise DataFetchError(f"Error connecting to database:\n{e}") from e

        logger.info("Fetched %d rows for %s (%s to %s)", len(df), category, start, end)
        return df

    def fetch_strategy_label(self) -> str:
        """Fetch the current withdrawal strategy name.

        Returns:
            Strategy name, or the placeholder if the query returns nothing.

        Raises:
            DataFetchError: If the query fails.
        """
        try:
            with self._engine.connect() as conn:
                result = conn.execute(text(self.strategy_query)).scalar()
        except SQLAlchemyError as e:
            raise DataFetchError(f"Error loading withdrawal strategy: {e}") from e

        if result is None or not str(result).strip():
            return config.STRATEGY_PLACEHOLDER
        return str(result)

    def list_categories(self) -> list[str]:
        """List the distinct tax types available in the view.

        Raises:
            DataFetchError: If the query fails.
        """
        query = text(f"SELECT DISTINCT TaxType FROM {self.series_view} ORDER BY TaxType")
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).scalars().all()
        except SQLAlchemyError as e:
            logger.error("Tax type query failed: %s", e)
            raise DataFetchError(f"Error loading Tax Types: {e}") from e
        return [str(row) for row in rows if row is not None]


def create_data_service(database_url: str | None = None) -> PortfolioDataService:
    """Create a data service for the configured database.

    Args:
        database_url: SQLAlchemy URL; defaults to ``config.DATABASE_URL``.

    Raises:
        DataFetchError: If the URL is invalid or its DBAPI driver is missing.
    """
    url = database_url or config.DATABASE_URL
    try:
        engine = create_engine(url)
    except (SQLAlchemyError, ImportError) as e:
        logger.error("Cannot create database engine: %s", e)
        raise DataFetchError(f"Error connecting to database:\n{e}") from e
    return PortfolioDataService(engine)
