"""
Utility functions for embedded-servers.
"""
