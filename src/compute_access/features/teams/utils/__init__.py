"""Team directory utilities."""
