"""Turning committed state changes into per-bucket holding times and transition counts."""
