"""
Parsers for IP-XACT metadata formats.
"""

from .xml import IpxactXmlParser, ParseError

__all__ = ["IpxactXmlParser", "ParseError"]
