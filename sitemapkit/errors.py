"""
Exceptions raised by the sitemap codec.
"""
from typing import Optional, Tuple


class SitemapError(Exception):
    """Base class for all sitemap codec errors"""


class SerializationError(SitemapError):
    """The in-memory structure could not be rendered to XML"""


class ParseError(SitemapError):
    """The input is not well-formed XML or not the expected document type"""

    def __init__(self, message: str, position: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.position = position
