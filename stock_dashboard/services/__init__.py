"""Data access, view state and chart sink services."""
