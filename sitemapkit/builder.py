"""
Construction helpers for URL entries.

make_url applies the protocol defaults and then a sequence of options, left
to right. Options come in two flavours:

- overwrite: with_last_mod, with_change_freq, with_priority. The last one wins.
- append: with_images, with_videos, with_alternates. Every call accumulates.

URLBuilder offers the same semantics as a fluent interface.
"""
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Union

from .config import SitemapConfiguration
from .interfaces import Clock, SystemClock
from .models import URL, Alternate, ChangeFreq, Image, Video

UrlOption = Callable[[URL], None]


def with_last_mod(last_mod: Optional[datetime]) -> UrlOption:
    """Overwrite the last modification time (None clears it)"""
    def apply(url: URL) -> None:
        url.last_mod = last_mod
    return apply


def with_change_freq(change_freq: Union[ChangeFreq, str]) -> UrlOption:
    """Overwrite the change frequency; raises ValueError for unknown values"""
    value = ChangeFreq.coerce(change_freq)

    def apply(url: URL) -> None:
        url.change_freq = value
    return apply


def with_priority(priority: Optional[float]) -> UrlOption:
    """Overwrite the priority (None clears it)"""
    def apply(url: URL) -> None:
        url.priority = priority
    return apply


def with_images(images: Iterable[Image]) -> UrlOption:
    """Append images to whatever the URL already has"""
    images = list(images)

    def apply(url: URL) -> None:
        url.images.extend(images)
    return apply


def with_videos(videos: Iterable[Video]) -> UrlOption:
    """Append videos to whatever the URL already has"""
    videos = list(videos)

    def apply(url: URL) -> None:
        url.videos.extend(videos)
    return apply


def with_alternates(alternates: Iterable[Alternate]) -> UrlOption:
    """Append xhtml:link alternates to whatever the URL already has"""
    alternates = list(alternates)

    def apply(url: URL) -> None:
        url.alternates.extend(alternates)
    return apply


def make_url(loc: str, *options: UrlOption,
             clock: Optional[Clock] = None,
             config: Optional[SitemapConfiguration] = None) -> URL:
    """
    Create a URL entry with defaults, then apply options in order

    Defaults: last_mod is the clock's current UTC time, change_freq is monthly
    and priority is 0.5, unless the configuration says otherwise.
    """
    clock = clock or SystemClock()
    config = config or SitemapConfiguration()

    url = URL(
        loc=loc,
        last_mod=clock.now(),
        change_freq=config.default_change_freq,
        priority=config.default_priority,
    )
    for option in options:
        option(url)
    return url


class URLBuilder:
    """Fluent builder for URL entries"""

    def __init__(self, loc: str, clock: Optional[Clock] = None,
                 config: Optional[SitemapConfiguration] = None):
        self.loc = loc
        self.clock = clock
        self.config = config
        self._options: List[UrlOption] = []

    def last_mod(self, value: Optional[datetime]) -> "URLBuilder":
        self._options.append(with_last_mod(value))
        return self

    def change_freq(self, value: Union[ChangeFreq, str]) -> "URLBuilder":
        self._options.append(with_change_freq(value))
        return self

    def priority(self, value: Optional[float]) -> "URLBuilder":
        self._options.append(with_priority(value))
        return self

    def images(self, *images: Image) -> "URLBuilder":
        self._options.append(with_images(images))
        return self

    def videos(self, *videos: Video) -> "URLBuilder":
        self._options.append(with_videos(videos))
        return self

    def alternates(self, *alternates: Alternate) -> "URLBuilder":
        self._options.append(with_alternates(alternates))
        return self

    def alternate(self, hreflang: str, href: str, rel: str = "alternate") -> "URLBuilder":
        """Shortcut for a single hreflang alternate"""
        return self.alternates(Alternate(rel=rel, hreflang=hreflang, href=href))

    def build(self) -> URL:
        """Create a fresh URL; the builder can be reused"""
        return make_url(self.loc, *self._options, clock=self.clock, config=self.config)
