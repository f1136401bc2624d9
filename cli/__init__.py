"""Command-line interface for querying loaded weather station data."""
