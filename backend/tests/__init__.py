"""
Test Suite for the Xpat Jobs backend.
"""
