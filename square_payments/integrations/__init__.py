"""
Integration modules

Payment handler contract and processor integrations.
"""
