"""LMS scores report to OMR upload template converter."""

__version__ = "0.1.0"
