"""
Core configuration, logging and exceptions for configurable settings.
"""
