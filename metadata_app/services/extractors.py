"""
Ordered fallback chains for page metadata.

Each field is described by a list of extractor functions tried in order;
the first non-empty result wins. Keeping the chains as data makes the
precedence explicit and each extractor testable on its own.

    title:        <title>  ->  og:title  ->  "No title found"
    description:  meta description  ->  og:description  ->  "No description available"
    favicon:      link rel variants  ->  {scheme}://{host}/favicon.ico
"""

from typing import Callable, Iterable, Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from metadata_app.schemas.metadata import ExtractedMetadata

Extractor = Callable[[BeautifulSoup], Optional[str]]

NO_TITLE = "No title found"
NO_DESCRIPTION = "No description available"

UNABLE_TO_FETCH = ExtractedMetadata(
    title="Unable to fetch title",
    description="Could not retrieve page information",
    favicon_url=None,
)


def _clean(value) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def title_tag(soup: BeautifulSoup) -> Optional[str]:
    tag = soup.find("title")
    return _clean(tag.get_text()) if tag else None


def meta_content(attribute: str, value: str) -> Extractor:
    """Extractor for <meta {attribute}="{value}" content="...">"""
    selector = f'meta[{attribute}="{value}"]'

    def extract(soup: BeautifulSoup) -> Optional[str]:
        tag = soup.select_one(selector)
        return _clean(tag.get("content")) if tag else None

    extract.__name__ = f"meta_{value.replace(':', '_')}"
    return extract


def link_href(selector: str) -> Extractor:
    """Extractor for the href of the first element matching ``selector``"""

    def extract(soup: BeautifulSoup) -> Optional[str]:
        tag = soup.select_one(selector)
        return _clean(tag.get("href")) if tag else None

    extract.__name__ = f"link_{selector}"
    return extract


TITLE_EXTRACTORS = [
    title_tag,
    meta_content("property", "og:title"),
]

DESCRIPTION_EXTRACTORS = [
    meta_content("name", "description"),
    meta_content("property", "og:description"),
]

# Exact rel matches, so "shortcut icon" is only picked up by its own entry
FAVICON_EXTRACTORS = [
    link_href('link[rel="icon"]'),
    link_href('link[rel="shortcut icon"]'),
    link_href('link[rel="apple-touch-icon"]'),
    link_href('link[rel="icon"][type="image/png"]'),
    link_href('link[rel="icon"][type="image/x-icon"]'),
]


def first_match(extractors: Iterable[Extractor], soup: BeautifulSoup) -> Optional[str]:
    for extractor in extractors:
        value = extractor(soup)
        if value:
            return value
    return None


def resolve_favicon(href: Optional[str], page_url: str) -> str:
    """
    Make a favicon href absolute against the page's scheme and host.

    No href at all means the conventional /favicon.ico.
    """
    parts = urlsplit(page_url)
    origin = f"{parts.scheme}://{parts.netloc}"

    if not href:
        return f"{origin}/favicon.ico"
    if href.startswith(("http://", "https://")):
        return href
    if href.startswith("//"):
        return f"{parts.scheme}:{href}"
    if href.startswith("/"):
        return f"{origin}{href}"
    return f"{origin}/{href}"


def extract_metadata(
    html: str,
    page_url: str,
    title_max_length: int = 200,
    description_max_length: int = 500
) -> ExtractedMetadata:
    """Run every chain over ``html`` and apply the length caps."""
    soup = BeautifulSoup(html, "html.parser")

    title = first_match(TITLE_EXTRACTORS, soup) or NO_TITLE
    description = first_match(DESCRIPTION_EXTRACTORS, soup) or NO_DESCRIPTION
    favicon_url = resolve_favicon(first_match(FAVICON_EXTRACTORS, soup), page_url)

    return ExtractedMetadata(
        title=title[:title_max_length],
        description=description[:description_max_length],
        favicon_url=favicon_url,
    )
