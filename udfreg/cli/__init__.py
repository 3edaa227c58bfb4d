"""
Command-line interface for udfreg.
"""
