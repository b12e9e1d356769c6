"""
Unit tests for the UNIFI Client for Python
"""
