"""Pure data processing for the dashboard."""
