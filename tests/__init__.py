"""
Test suite for fixed_point

Contains:
- tests/unit/          : Unit tests for individual modules
"""
