"""Utilities for JSON:API parameter parsing."""

from .query_params import nest_query_params, split_csv

__all__ = ["nest_query_params", "split_csv"]
