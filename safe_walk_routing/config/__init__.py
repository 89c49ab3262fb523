"""
Configuration management for safe walk routing.
"""

from .routing_config import RoutingConfig

__all__ = [
    'RoutingConfig'
]
