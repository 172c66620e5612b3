"""Search execution and result extraction."""
