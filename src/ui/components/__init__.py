"""Reusable UI components."""

from src.ui.components.portfolio_chart import PortfolioChart
from src.ui.components.status_banner import StatusBanner

__all__ = [
    "PortfolioChart",
    "StatusBanner",
]
