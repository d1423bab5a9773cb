"""
Data Models
===========

Pydantic models for render options and rendered documents.
"""
