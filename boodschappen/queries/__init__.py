"""Totals query package."""

from boodschappen.queries.executor import QueryExecutionError, TotalsExecutor

__all__ = ["QueryExecutionError", "TotalsExecutor"]
