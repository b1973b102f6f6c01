"""Manoa Compass backend: campus clubs and events directory."""
