"""
Test Utilities
==============

Common utilities and helpers for testing.
"""

from .assertions import *
from .data_generators import *
from .mocks import *
