"""
Core module - settings, logging and application errors.
"""
