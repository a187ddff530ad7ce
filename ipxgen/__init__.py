"""
ipxgen - SpinalHDL BlackBox generation from IP-XACT metadata.
"""

__version__ = "0.1.0"
