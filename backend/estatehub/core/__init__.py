"""
Core application infrastructure: configuration, logging and errors
"""
