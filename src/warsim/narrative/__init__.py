"""Battle report generation."""
