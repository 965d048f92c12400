"""
Command-line interface for the Epitech-Style-Checker.
"""
