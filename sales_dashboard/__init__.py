"""Sales analytics dashboard."""
