"""
Entity types for sitemap and sitemap index documents.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XHTML_NS = "http://www.w3.org/1999/xhtml"
IMAGE_NS = "http://www.google.com/schemas/sitemap-image/1.1"
VIDEO_NS = "http://www.google.com/schemas/sitemap-video/1.1"


class ChangeFreq(str, Enum):
    """How often a page is expected to change"""
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"

    @classmethod
    def coerce(cls, value: Union["ChangeFreq", str]) -> "ChangeFreq":
        """Map a member or one of the seven protocol strings to a member.

        Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        allowed = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid change frequency {value!r}, expected one of: {allowed}")

    def __str__(self) -> str:
        return self.value


@dataclass
class SitemapEntry:
    """One reference to a child sitemap file"""
    loc: str
    last_mod: Optional[datetime] = None


@dataclass
class SitemapIndex:
    """A document listing other sitemap files"""
    sitemaps: List[SitemapEntry] = field(default_factory=list)
    xmlns: str = SITEMAP_NS

    def add(self, loc: str, last_mod: Optional[datetime] = None) -> None:
        """Append one child sitemap reference"""
        self.sitemaps.append(SitemapEntry(loc=loc, last_mod=last_mod))

    def generate_xml(self, config=None, logger=None) -> str:
        """Render the index as XML text"""
        from .codec import generate_sitemap_index_xml
        return generate_sitemap_index_xml(self, config=config, logger=logger)


@dataclass
class Image:
    """An image:image block"""
    loc: str
    caption: Optional[str] = None
    title: Optional[str] = None


@dataclass
class Video:
    """A video:video block"""
    loc: str
    thumbnail_loc: str
    title: str
    description: str
    content_loc: Optional[str] = None
    duration: Optional[int] = None  # seconds
    category: Optional[str] = None
    tags: List[str] = field(default_factory=list)


@dataclass
class Alternate:
    """An xhtml:link pointing at a language or regional variant of a page"""
    rel: str
    hreflang: str
    href: str


@dataclass
class URL:
    """One page entry of a URL set.

    Unset optional values are None and are left out of the generated XML.
    Use builder.make_url to get the protocol defaults.
    """
    loc: str
    last_mod: Optional[datetime] = None
    change_freq: Optional[Union[ChangeFreq, str]] = None
    priority: Optional[float] = None
    images: List[Image] = field(default_factory=list)
    videos: List[Video] = field(default_factory=list)
    alternates: List[Alternate] = field(default_factory=list)


@dataclass
class URLSet:
    """A document listing page URLs for one sitemap file"""
    urls: List[URL] = field(default_factory=list)
    xmlns: str = SITEMAP_NS
    xhtml: Optional[str] = None
    image: Optional[str] = None
    video: Optional[str] = None

    def add(self, url: URL) -> None:
        """Append a URL; the set takes ownership of it"""
        self.urls.append(url)

    def generate_xml(self, config=None, logger=None) -> str:
        """Render the set as XML text"""
        from .codec import generate_url_set_xml
        return generate_url_set_xml(self, config=config, logger=logger)


def make_sitemap_index(entries: Optional[List[SitemapEntry]] = None) -> SitemapIndex:
    """Create an index wrapping the given entries (the list is not copied)"""
    return SitemapIndex(sitemaps=entries if entries is not None else [])


def make_url_set() -> URLSet:
    """Create an empty URL set with the sitemap and xhtml namespaces declared"""
    return URLSet(xmlns=SITEMAP_NS, xhtml=XHTML_NS)
