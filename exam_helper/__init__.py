"""Exam Helper: retrieval-augmented study assistant for uploaded documents."""

__version__ = "0.1.0"
