"""Database storage."""
