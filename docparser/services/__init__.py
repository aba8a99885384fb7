"""Batch services: job orchestration, CSV export, progress and summary output."""
