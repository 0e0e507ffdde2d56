"""Data types, value trees, errors and the Result type."""
