"""Persistence for dense analytics arrays."""
