"""
Clients for SkyVendas.

- SkyVendasAPIClient: async JSON access to the marketplace REST API
"""

from .api_client import SkyVendasAPIClient

__all__ = ["SkyVendasAPIClient"]
