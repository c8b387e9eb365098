"""
Test suite for pottycrm

Contains:
- tests/unit/          : Unit tests for individual modules
"""
