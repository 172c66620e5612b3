"""Vector bulk indexing."""
