"""
Utilities Package
RPC connection handling and network config output
"""

from .rpc_manager import RPCManager
from .network_config import NetworkConfigWriter, load_network_config, render_typescript

__all__ = [
    'RPCManager',
    'NetworkConfigWriter',
    'load_network_config',
    'render_typescript'
]
