"""
Test suite for the cart history engine

Contains:
- tests/unit/          : Unit and property-based tests for individual modules
"""
