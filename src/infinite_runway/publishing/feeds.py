"""RSS feed and sitemaps over the publication catalog."""
from datetime import datetime, time, timezone
from email.utils import format_datetime
from typing import Any, Dict, Iterable, Optional
from xml.etree import ElementTree as ET

from ..config import Settings
from ..models.publication import PublicationRecord

ATOM_NS = "http://www.w3.org/2005/Atom"
CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
DC_NS = "http://purl.org/dc/elements/1.1/"
MEDIA_NS = "http://search.yahoo.com/mrss/"
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

for _prefix, _uri in (("atom", ATOM_NS), ("content", CONTENT_NS), ("dc", DC_NS), ("media", MEDIA_NS)):
    ET.register_namespace(_prefix, _uri)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

CHANNEL_CATEGORIES = ["Technology", "AI", "Business", "Startup"]

PAGE_TITLES = {
    "/": "Home",
    "/essays": "Essays",
    "/advertise": "Advertise",
    "/about": "About",
    "/contact": "Contact",
    "/careers": "Careers",
    "/partners": "Partners",
    "/privacy": "Privacy Policy",
    "/terms": "Terms of Use",
    "/cookies": "Cookie Policy",
    "/sitemap": "Sitemap",
}


def post_url(settings: Settings, record: PublicationRecord) -> str:
    return f"{settings.site_url.rstrip('/')}/posts/{record.slug}"


def _absolute(settings: Settings, url: str) -> str:
    if url.startswith(("http://", "https://", "data:")):
        return url
    return f"{settings.site_url.rstrip('/')}/{url.lstrip('/')}"


def _text(parent: ET.Element, tag: str, text: str, **attrib: str) -> ET.Element:
    element = ET.SubElement(parent, tag, attrib)
    element.text = text
    return element


def _serialize(root: ET.Element) -> str:
    ET.indent(root)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")


def build_rss(records: Iterable[PublicationRecord], settings: Settings, now: Optional[datetime] = None) -> str:
    """RSS 2.0 document with one <item> per record, in the given order."""
    now = now or datetime.now(timezone.utc)
    site = settings.site_url.rstrip('/')

    rss = ET.Element("rss", {"version": "2.0"})
    channel = ET.SubElement(rss, "channel")
    _text(channel, "title", settings.site_name)
    _text(channel, "link", site)
    _text(channel, "description", settings.site_description)
    _text(channel, "language", "en")
    _text(channel, "lastBuildDate", format_datetime(now, usegmt=True))
    _text(channel, "generator", f"{settings.site_name} RSS Generator")
    _text(channel, "managingEditor", settings.managing_editor)
    for category in CHANNEL_CATEGORIES:
        _text(channel, "category", category)
    image = ET.SubElement(channel, "image")
    _text(image, "url", f"{site}/images/logo.svg")
    _text(image, "title", settings.site_name)
    _text(image, "link", site)
    ET.SubElement(channel, f"{{{ATOM_NS}}}link", {
        "href": f"{site}/rss.xml", "rel": "self", "type": "application/rss+xml",
    })

    for record in records:
        link = post_url(settings, record)
        published = datetime.combine(record.publish_date, time(), tzinfo=timezone.utc)
        item = ET.SubElement(channel, "item")
        _text(item, "title", record.title)
        _text(item, "link", link)
        _text(item, "guid", link, isPermaLink="true")
        _text(item, "pubDate", format_datetime(published, usegmt=True))
        _text(item, f"{{{DC_NS}}}creator", record.author_name)
        for tag in record.tags or ["Technology", "AI"]:
            _text(item, "category", tag)
        _text(item, "description", record.description)
        _text(item, f"{{{CONTENT_NS}}}encoded", record.content)
        # base64 covers would bloat every feed reader's cache
        if not record.image_url.startswith("data:"):
            image_url = _absolute(settings, record.image_url)
            ET.SubElement(item, f"{{{MEDIA_NS}}}content", {"url": image_url, "medium": "image"})
            ET.SubElement(item, f"{{{MEDIA_NS}}}thumbnail", {"url": image_url})

    return _serialize(rss)


def build_sitemap_xml(records: Iterable[PublicationRecord], settings: Settings, now: Optional[datetime] = None) -> str:
    """Sitemap with the main pages followed by one entry per record."""
    now = now or datetime.now(timezone.utc)
    site = settings.site_url.rstrip('/')

    urlset = ET.Element("urlset", {"xmlns": SITEMAP_NS})
    for page in settings.main_pages:
        url = ET.SubElement(urlset, "url")
        _text(url, "loc", f"{site}{page}")
        _text(url, "lastmod", now.isoformat())
    for record in records:
        url = ET.SubElement(urlset, "url")
        _text(url, "loc", post_url(settings, record))
        _text(url, "lastmod", record.publish_date.isoformat())
    return _serialize(urlset)


def build_sitemap_json(settings: Settings, now: Optional[datetime] = None) -> Dict[str, Any]:
    """JSON sitemap of the site's static pages."""
    now = now or datetime.now(timezone.utc)
    site = settings.site_url.rstrip('/')
    return {
        "version": "1.0",
        "generated": now.isoformat(),
        "baseUrl": site,
        "pages": [
            {
                "url": f"{site}{path}",
                "lastModified": now.isoformat(),
                "title": title,
                "changeFrequency": "weekly",
                "priority": 0.8,
            }
            for path, title in PAGE_TITLES.items()
        ],
    }
