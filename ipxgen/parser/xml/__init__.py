"""
XML parsers for IP-XACT metadata.
"""

from .errors import ParseError
from .ipxact_parser import IpxactXmlParser
from .tree import METADATA_PREFIXES, SchemaNode

__all__ = ["IpxactXmlParser", "ParseError", "SchemaNode", "METADATA_PREFIXES"]
