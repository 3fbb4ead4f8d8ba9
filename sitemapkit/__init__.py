"""
Sitemap model and XML codec.
Exposes the entity types, URL builder and the generate/parse functions.
"""

# Entity types
from .models import (
    SITEMAP_NS,
    XHTML_NS,
    IMAGE_NS,
    VIDEO_NS,
    ChangeFreq,
    SitemapEntry,
    SitemapIndex,
    URL,
    URLSet,
    Image,
    Video,
    Alternate,
    make_sitemap_index,
    make_url_set,
)

# URL construction
from .builder import (
    UrlOption,
    URLBuilder,
    make_url,
    with_last_mod,
    with_change_freq,
    with_priority,
    with_images,
    with_videos,
    with_alternates,
)

# XML codec
from .codec import (
    generate_sitemap_index_xml,
    generate_url_set_xml,
    parse_sitemap_index,
    parse_url_set,
    parse_xml,
    format_timestamp,
    parse_timestamp,
)

from .errors import SitemapError, SerializationError, ParseError
from .interfaces import Clock, Logger, SystemClock, FixedClock
from .config import (
    SitemapConfiguration,
    ConfigurationManager,
    EnvironmentConfigProvider,
    DictConfigProvider,
)
from .logging import LoggerFactory

__all__ = [
    # Namespaces
    'SITEMAP_NS',
    'XHTML_NS',
    'IMAGE_NS',
    'VIDEO_NS',

    # Entities
    'ChangeFreq',
    'SitemapEntry',
    'SitemapIndex',
    'URL',
    'URLSet',
    'Image',
    'Video',
    'Alternate',
    'make_sitemap_index',
    'make_url_set',

    # Builder
    'UrlOption',
    'URLBuilder',
    'make_url',
    'with_last_mod',
    'with_change_freq',
    'with_priority',
    'with_images',
    'with_videos',
    'with_alternates',

    # Codec
    'generate_sitemap_index_xml',
    'generate_url_set_xml',
    'parse_sitemap_index',
    'parse_url_set',
    'parse_xml',
    'format_timestamp',
    'parse_timestamp',

    # Errors
    'SitemapError',
    'SerializationError',
    'ParseError',

    # Clock, logging and configuration
    'Clock',
    'Logger',
    'SystemClock',
    'FixedClock',
    'SitemapConfiguration',
    'ConfigurationManager',
    'EnvironmentConfigProvider',
    'DictConfigProvider',
    'LoggerFactory',
]
