"""
Service packages.

Importing this package imports every service, which registers its
resources and data sources with the ResourceRegistry.
"""

from . import advisor, netapp, network, portal, privatedns

__all__ = ["advisor", "netapp", "network", "portal", "privatedns"]
