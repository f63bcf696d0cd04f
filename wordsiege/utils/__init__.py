"""
Utilities: configuration loading and word banks.
"""
