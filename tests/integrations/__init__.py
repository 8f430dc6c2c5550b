"""
Integration test modules

Tests for the payment handler contract and the Square integration.
"""
