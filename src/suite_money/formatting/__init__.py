"""Locale-aware rendering and parsing of money amounts."""
