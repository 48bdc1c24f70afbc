"""
Tests for the Comparo suite.
"""
