"""
Core Business Logic
==================

Core modules for turning tabular datasets into rendered tables.

Modules:
- dataset: Coercion of caller data and header label resolution
- rendering: HTML, image and LaTeX table generation
"""
