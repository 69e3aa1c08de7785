"""
Utilities Package
Network configuration and logging setup
"""

from .network_config import NetworkConfig, ProjectConfig, load_config
from .logging_setup import configure_logging

__all__ = [
    'NetworkConfig',
    'ProjectConfig',
    'load_config',
    'configure_logging'
]
