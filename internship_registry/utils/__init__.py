"""
Utility helpers - upload handling and Excel dates.
"""
