"""
Test package for the Epitech-Style-Checker.

This package contains:
- Unit tests for individual components
- Integration tests for the scanner, aggregator, CLI and API together
- Property-based tests using Hypothesis
"""
