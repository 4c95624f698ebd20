"""Petroleum HR service: employee records, folder trees, and project scheduling."""

__version__ = "1.0.0"
