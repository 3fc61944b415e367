"""Custom exceptions for Portfolio Monitor."""


class PortfolioMonitorError(Exception):
    """Base exception for Portfolio Monitor.

    All custom exceptions in the application should inherit from this class
    to enable consistent exception handling.
    """


class DataFetchError(PortfolioMonitorError):
    """Raised when the portfolio database cannot be queried.

    Covers connection failures and query errors. The current chart is left
    untouched and the message is shown to the user.
    """


class EmptyResultError(PortfolioMonitorError):
    """Raised when a valid query returns no rows.

    Surfaced to the user like a fetch failure; the last rendered chart
    remains visible.
    """


class DegenerateSelectionError(PortfolioMonitorError):
    """Raised when a zoom selection has zero width or height.

    Not a user-facing error. The zoom controller catches it and ignores
    the selection.
    """


class CoordinateMappingError(PortfolioMonitorError):
    """Raised when a pixel position cannot be mapped into data space.

    Happens when the pointer is outside the plotted area. The crosshair
    is hidden instead.
    """
