"""Monetary domain package.

This package contains the `Currency` value object, the currency registry that builds and
serves currency records, and `Money`, an exact Decimal amount tagged with a currency.
"""
