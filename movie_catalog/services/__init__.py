"""Domain operations used by the API routes."""
