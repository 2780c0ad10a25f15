"""
REST API for the marketplace
"""
