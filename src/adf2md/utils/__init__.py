#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility functions for the adf2md library."""
