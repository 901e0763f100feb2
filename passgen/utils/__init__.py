"""
Password generation utilities for passgen.
"""
