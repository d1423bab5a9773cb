"""
Test Suite
==========

Test suite matching the research_tables/ package structure.

Test Categories:
- unit: Unit tests for individual components
- utils: Shared assertions, fakes and data generators
"""
