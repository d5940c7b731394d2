"""
Lifecycle rules binding embedded servers to test boundaries.
"""

from embedded_servers.rules.server_rule import ServerRule

__all__ = ["ServerRule"]
