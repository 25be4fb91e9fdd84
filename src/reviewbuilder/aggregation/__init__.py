"""Aggregation module for the review join.

- Pure functions over loaded collections
- Forbidden: file IO, logging, raising on data issues
"""
