"""Driver loop."""
