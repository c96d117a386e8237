"""Command-line interface for the search-string compiler."""
