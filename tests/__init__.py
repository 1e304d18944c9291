"""
Test suite for block decay

Contains:
- tests/unit/          : Unit tests for individual modules
"""
