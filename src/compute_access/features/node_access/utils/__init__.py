"""Node access utilities."""
