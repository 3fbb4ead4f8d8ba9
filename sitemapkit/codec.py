"""
Sitemap XML 编解码

生成与解析 sitemaps.org 格式的 urlset 和 sitemapindex 文档，
支持 image / video / xhtml:link 扩展。
"""
import re
import warnings
import xml.etree.ElementTree as ET
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Optional, Tuple, Union

from .config import SitemapConfiguration
from .errors import ParseError, SerializationError
from .interfaces import Logger
from .models import (
    IMAGE_NS, SITEMAP_NS, URL, VIDEO_NS, Alternate, ChangeFreq, Image,
    SitemapEntry, SitemapIndex, URLSet, Video,
)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

# XML 1.0 不允许出现的字符
_ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

XMLContent = Union[str, bytes]


# ---------------------------------------------------------------------------
# 生成
# ---------------------------------------------------------------------------

def generate_sitemap_index_xml(index: SitemapIndex,
                               config: Optional[SitemapConfiguration] = None,
                               logger: Optional[Logger] = None) -> str:
    """
    生成 sitemapindex XML

    根元素总是带上 xmlns 属性，每个条目输出 <loc>，有 lastmod 时输出 <lastmod>
    """
    config = config or SitemapConfiguration()

    root = ET.Element("sitemapindex")
    root.set("xmlns", index.xmlns or SITEMAP_NS)

    for entry in index.sitemaps:
        sitemap_elem = ET.SubElement(root, "sitemap")
        _add_loc(sitemap_elem, "loc", entry.loc, "sitemap")
        if entry.last_mod is not None:
            _add_text(sitemap_elem, "lastmod", format_timestamp(entry.last_mod))

    xml_str = _render(root, config)
    if logger:
        logger.debug(f"Generated sitemapindex with {len(index.sitemaps)} sitemaps")
    return xml_str


def generate_url_set_xml(url_set: URLSet,
                         config: Optional[SitemapConfiguration] = None,
                         logger: Optional[Logger] = None) -> str:
    """
    生成 urlset XML

    命名空间属性只在有值时输出；image / video 命名空间在需要时自动声明
    （可通过配置关闭），不会修改传入的 URLSet
    """
    config = config or SitemapConfiguration()

    image_ns = url_set.image
    video_ns = url_set.video
    if config.declare_extension_namespaces:
        if not image_ns and any(url.images for url in url_set.urls):
            image_ns = IMAGE_NS
        if not video_ns and any(url.videos for url in url_set.urls):
            video_ns = VIDEO_NS

    root = ET.Element("urlset")
    root.set("xmlns", url_set.xmlns or SITEMAP_NS)
    for name, value in (("xmlns:xhtml", url_set.xhtml),
                        ("xmlns:image", image_ns),
                        ("xmlns:video", video_ns)):
        if value:
            _set_attr(root, name, value)

    for url in url_set.urls:
        _build_url(root, url)

    xml_str = _render(root, config)
    if logger:
        logger.debug(f"Generated urlset with {len(url_set.urls)} urls")
    return xml_str


def _build_url(parent: ET.Element, url: URL) -> None:
    url_elem = ET.SubElement(parent, "url")
    _add_loc(url_elem, "loc", url.loc, "url")

    if url.last_mod is not None:
        _add_text(url_elem, "lastmod", format_timestamp(url.last_mod))

    change_freq = url.change_freq.value if isinstance(url.change_freq, ChangeFreq) else url.change_freq
    if change_freq:
        _add_text(url_elem, "changefreq", change_freq)

    if url.priority is not None:
        _add_text(url_elem, "priority", format_priority(url.priority))

    for image in url.images:
        image_elem = ET.SubElement(url_elem, "image:image")
        _add_loc(image_elem, "image:loc", image.loc, "image:image")
        if image.caption:
            _add_text(image_elem, "image:caption", image.caption)
        if image.title:
            _add_text(image_elem, "image:title", image.title)

    for video in url.videos:
        _build_video(url_elem, video)

    for alternate in url.alternates:
        link_elem = ET.SubElement(url_elem, "xhtml:link")
        _set_attr(link_elem, "rel", alternate.rel)
        _set_attr(link_elem, "hreflang", alternate.hreflang)
        _set_attr(link_elem, "href", alternate.href)


def _build_video(parent: ET.Element, video: Video) -> None:
    video_elem = ET.SubElement(parent, "video:video")
    _add_loc(video_elem, "video:loc", video.loc, "video:video")
    # 以下三个字段在 schema 中必填，这里不做校验，原样输出
    _add_text(video_elem, "video:thumbnail_loc", video.thumbnail_loc or "")
    _add_text(video_elem, "video:title", video.title or "")
    _add_text(video_elem, "video:description", video.description or "")
    if video.content_loc:
        _add_text(video_elem, "video:content_loc", video.content_loc)
    if video.duration:
        if isinstance(video.duration, bool) or not isinstance(video.duration, int):
            raise SerializationError(f"video duration must be an integer, got {video.duration!r}")
        _add_text(video_elem, "video:duration", str(video.duration))
    if video.category:
        _add_text(video_elem, "video:category", video.category)
    for tag in video.tags:
        _add_text(video_elem, "video:tag", tag)


def _check_text(value, what: str) -> str:
    if not isinstance(value, str):
        raise SerializationError(f"{what} must be a string, got {type(value).__name__}")
    match = _ILLEGAL_XML_CHARS.search(value)
    if match:
        raise SerializationError(f"{what} contains a character not allowed in XML: {match.group()!r}")
    return value


def _add_text(parent: ET.Element, tag: str, value) -> ET.Element:
    elem = ET.SubElement(parent, tag)
    elem.text = _check_text(value, f"<{tag}>")
    return elem


def _add_loc(parent: ET.Element, tag: str, value, owner: str) -> ET.Element:
    if not value:
        raise SerializationError(f"<{owner}> requires a non-empty <{tag}>")
    return _add_text(parent, tag, value)


def _set_attr(elem: ET.Element, name: str, value) -> None:
    elem.set(name, _check_text(value, f"attribute {name}"))


def _render(root: ET.Element, config: SitemapConfiguration) -> str:
    """缩进并序列化，加上 XML 声明"""
    if not isinstance(config.indent, str) or config.indent.strip():
        raise SerializationError(f"indent must contain only whitespace, got {config.indent!r}")
    try:
        ET.indent(root, space=config.indent)
        xml_str = ET.tostring(root, encoding="unicode", method="xml")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize sitemap: {e}") from e
    return XML_HEADER + xml_str


def format_timestamp(value: Union[datetime, date]) -> str:
    """
    将时间格式化为 W3C Datetime (RFC 3339)
    例如: 2024-01-01T00:00:00Z

    没有时区的 datetime 视为 UTC；date 只输出日期部分
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        text = value.isoformat()
        if value.utcoffset() == timedelta(0):
            text = text[:-len("+00:00")] + "Z"
        return text
    if isinstance(value, date):
        return value.isoformat()
    raise SerializationError(f"lastmod must be a datetime, got {type(value).__name__}")


def format_priority(value: float) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SerializationError(f"priority must be a number, got {value!r}")
    return repr(float(value))


# ---------------------------------------------------------------------------
# 解析
# ---------------------------------------------------------------------------

def parse_sitemap_index(content: XMLContent,
                        logger: Optional[Logger] = None) -> SitemapIndex:
    """
    解析 sitemapindex XML

    未知元素直接忽略；XML 格式错误或根元素不是 <sitemapindex> 时抛出 ParseError
    """
    root, namespaces = _parse_document(content, "sitemapindex")

    index = SitemapIndex(sitemaps=[], xmlns=namespaces.get("") or SITEMAP_NS)
    for sitemap_elem in _children(root, "sitemap"):
        loc = _child_text(sitemap_elem, "loc")
        if not loc:
            raise ParseError("<sitemap> element without <loc>")
        lastmod = _child_text(sitemap_elem, "lastmod")
        index.sitemaps.append(SitemapEntry(
            loc=loc,
            last_mod=parse_timestamp(lastmod) if lastmod else None,
        ))

    if logger:
        logger.debug(f"Parsed sitemapindex with {len(index.sitemaps)} sitemaps")
    return index


def parse_url_set(content: XMLContent,
                  config: Optional[SitemapConfiguration] = None,
                  logger: Optional[Logger] = None) -> URLSet:
    """
    解析 urlset XML

    未设置的可选字段保持为 None，不填充默认值
    """
    config = config or SitemapConfiguration()
    root, namespaces = _parse_document(content, "urlset")

    declared = set(namespaces.values())
    url_set = URLSet(
        urls=[],
        xmlns=namespaces.get("") or SITEMAP_NS,
        xhtml=namespaces.get("xhtml"),
        image=IMAGE_NS if IMAGE_NS in declared else namespaces.get("image"),
        video=VIDEO_NS if VIDEO_NS in declared else namespaces.get("video"),
    )
    for url_elem in _children(root, "url"):
        url_set.urls.append(_parse_url(url_elem, config))

    if logger:
        logger.debug(f"Parsed urlset with {len(url_set.urls)} urls")
    return url_set


def parse_xml(content: XMLContent,
              config: Optional[SitemapConfiguration] = None,
              logger: Optional[Logger] = None) -> URLSet:
    """已废弃，请使用 parse_url_set（行为完全相同）"""
    warnings.warn("parse_xml is deprecated, use parse_url_set instead",
                  DeprecationWarning, stacklevel=2)
    return parse_url_set(content, config=config, logger=logger)


def _parse_document(content: XMLContent, expected_root: str) -> Tuple[ET.Element, Dict[str, str]]:
    """解析文档，返回根元素和根元素上声明的命名空间 {prefix: uri}"""
    parser = ET.XMLPullParser(events=("start-ns", "start"))
    try:
        parser.feed(content)
        parser.close()
        # feed() 中的语法错误会在读取事件时才抛出
        events = list(parser.read_events())
    except ET.ParseError as e:
        raise ParseError(f"Malformed XML: {e}", position=getattr(e, "position", None)) from e

    root = None
    namespaces: Dict[str, str] = {}
    for event, payload in events:
        if root is not None:
            continue
        if event == "start-ns":
            prefix, uri = payload
            namespaces[prefix] = uri
        elif event == "start":
            root = payload

    if root is None:
        raise ParseError("Document has no root element")
    if _local(root.tag) != expected_root:
        raise ParseError(f"Expected element type <{expected_root}> but have <{_local(root.tag)}>")
    return root, namespaces


def _parse_url(url_elem: ET.Element, config: SitemapConfiguration) -> URL:
    loc = _child_text(url_elem, "loc")
    if not loc:
        raise ParseError("<url> element without <loc>")

    lastmod = _child_text(url_elem, "lastmod")
    change_freq = _child_text(url_elem, "changefreq")
    priority = _child_text(url_elem, "priority")

    url = URL(
        loc=loc,
        last_mod=parse_timestamp(lastmod) if lastmod else None,
        change_freq=_parse_change_freq(change_freq, config) if change_freq else None,
        priority=_parse_number(priority, float, "priority") if priority else None,
    )

    for child in url_elem:
        name = _local(child.tag)
        if name == "image":
            image_loc = _child_text(child, "loc")
            if not image_loc:
                raise ParseError("<image:image> element without <image:loc>")
            url.images.append(Image(
                loc=image_loc,
                caption=_child_text(child, "caption") or None,
                title=_child_text(child, "title") or None,
            ))
        elif name == "video":
            url.videos.append(_parse_video(child))
        elif name == "link":
            url.alternates.append(Alternate(
                rel=child.get("rel", ""),
                hreflang=child.get("hreflang", ""),
                href=child.get("href", ""),
            ))
    return url


def _parse_video(video_elem: ET.Element) -> Video:
    # Google 的 schema 使用 player_loc，兼容读取
    loc = _child_text(video_elem, "loc") or _child_text(video_elem, "player_loc")
    if not loc:
        raise ParseError("<video:video> element without <video:loc>")
    duration = _child_text(video_elem, "duration")
    return Video(
        loc=loc,
        thumbnail_loc=_child_text(video_elem, "thumbnail_loc") or "",
        title=_child_text(video_elem, "title") or "",
        description=_child_text(video_elem, "description") or "",
        content_loc=_child_text(video_elem, "content_loc") or None,
        duration=_parse_number(duration, int, "video:duration") if duration else None,
        category=_child_text(video_elem, "category") or None,
        tags=[tag.text.strip() for tag in _children(video_elem, "tag") if tag.text and tag.text.strip()],
    )


def _parse_change_freq(value: str, config: SitemapConfiguration) -> Union[ChangeFreq, str]:
    try:
        return ChangeFreq.coerce(value)
    except ValueError as e:
        if config.strict_change_freq:
            raise ParseError(str(e)) from e
        return value


def _parse_number(value: str, kind, what: str):
    try:
        return kind(value)
    except ValueError as e:
        raise ParseError(f"Invalid <{what}> value: {value!r}") from e


def parse_timestamp(value: str) -> datetime:
    """
    解析 W3C Datetime，返回带时区的 datetime

    支持 Z 结尾、时区偏移和仅日期（按 UTC 零点处理）
    datetime 只保留到微秒，更长的小数秒（如 .123456789）会被截断
    """
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ParseError(f"Invalid <lastmod> value: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _local(tag) -> str:
    """去掉 {namespace} 前缀"""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _children(elem: ET.Element, name: str):
    return [child for child in elem if _local(child.tag) == name]


def _child_text(elem: ET.Element, name: str) -> Optional[str]:
    for child in elem:
        if _local(child.tag) == name:
            return (child.text or "").strip()
    return None
