"""Application configuration for Portfolio Monitor.

Values that differ between deployments can be overridden with environment
variables; everything else is a plain module constant. The default database
URL uses pyodbc, installed with the `mssql` extra.
"""

import os

APP_NAME = "Portfolio Monitor"
WINDOW_TITLE = "Portfolio Monitor - Guyton-Klinger"

# Database
DATABASE_URL = os.environ.get(
    "PORTFOLIO_MONITOR_DATABASE_URL",
    "mssql+pyodbc://@(localdb)\\MSSQLLocalDB/Guyton-Klinger-Withdrawals"
    "?driver=ODBC+Driver+18+for+SQL+Server&trusted_connection=yes"
    "&TrustServerCertificate=yes",
)
SERIES_VIEW = "dbo.vw_CompositePortfolio_MovingAverage"
STRATEGY_QUERY = "EXEC [dbo].[usp_GetWithdrawalStrategy]"

# Filter defaults
DEFAULT_CATEGORY = "Tax Free"
DEFAULT_LOOKBACK_YEARS = 2

# Axis behaviour
WEEKLY_THRESHOLD_DAYS = 120  # visible spans at or below this use weekly ticks
Y_AXIS_STEP = 0.1

# Footer
STRATEGY_PLACEHOLDER = "Unknown"
MISSING_VALUE_TEXT = "N/A"

# Logging
LOG_LEVEL = os.environ.get("PORTFOLIO_MONITOR_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
