"""Report-viewed notification relay."""
