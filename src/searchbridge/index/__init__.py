"""Index and index-template administration."""
