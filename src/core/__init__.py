"""
Core domain models and contracts.

This module contains the cart domain (items, aggregate, snapshots) and the
JSON contracts used to exchange snapshots with external components.
"""
