"""
Reference buy-back price lookup on external catalog sites.

Catalog pages are scraped, so every parser here tolerates missing markup
and returns ``None`` rather than guessing.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup

from config import settings

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124 Safari/537.36"
)
CONTEXT_WINDOW = 300

_DETAIL_LINK = re.compile(r'href="(/kaitori/detail/[^"]+)"')
_PRICE_DIGITS = re.compile(r"([0-9][0-9,]*)")

_CONTEXT_PATTERNS = (
    ("softbank", re.compile(r"softbank|ソフトバンク")),
    ("docomo", re.compile(r"docomo|ドコモ")),
    ("au", re.compile(r"\bau\b|kddi")),
    ("simfree", re.compile(r"sim\s*free|simフリー|simフリ")),
    ("rakuten", re.compile(r"rakuten|楽天")),
)


class PriceLookupError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class PriceSearchResult:
    model_prefix: str
    carrier_slug: str
    search_url: str
    first_link: Optional[str]


def to_carrier_slug(carrier: Optional[str]) -> str:
    """Map free-text carrier names to the catalog's carrier slug."""
    s = (carrier or "").lower()
    if not s:
        return ""
    if s.startswith("au") or "kddi" in s:
        return "au"
    if "softbank" in s or "ソフトバンク" in s:
        return "softbank"
    if "docomo" in s or "ドコモ" in s:
        return "docomo"
    if "sim" in s:
        return "simfree"
    if "楽天" in s or "rakuten" in s:
        return "rakuten"
    return ""


def carrier_from_context(html: str, index: int) -> str:
    """Guess the carrier of a search hit from the text around its link."""
    start = max(0, index - CONTEXT_WINDOW)
    end = min(len(html), index + CONTEXT_WINDOW)
    context = html[start:end].lower()
    for slug, pattern in _CONTEXT_PATTERNS:
        if pattern.search(context):
            return slug
    return ""


def parse_search_links(html: str, carrier_slug: str, base_url: str) -> Optional[str]:
    """First detail link whose context matches the carrier, else the first link."""
    first_link = None
    for match in _DETAIL_LINK.finditer(html):
        link = f"{base_url}{match.group(1)}"
        if first_link is None:
            first_link = link
        if carrier_slug and carrier_from_context(html, match.start()) == carrier_slug:
            return link
    return first_link


def parse_price(html: str) -> Optional[int]:
    """Read the first displayed price on a catalog page."""
    soup = BeautifulSoup(html, "html.parser")
    for element in (soup.select_one("span.price"), soup.find("bdi")):
        if element is None:
            continue
        match = _PRICE_DIGITS.search(element.get_text())
        if match:
            return int(match.group(1).replace(",", ""))
    return None


def geo_search_url(model_prefix: str) -> str:
    return f"{settings.geo_site_base_url}/search/?q={quote(model_prefix)}"


class PriceLookupClient:
    """Searches the reference catalog for buy-back prices."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.price_site_base_url).rstrip("/")
        self.timeout = timeout or settings.price_lookup_timeout_s

    def _headers(self) -> dict:
        return {
            "User-Agent": USER_AGENT,
            "Accept-Language": "ja,en;q=0.9",
        }

    async def _get_html(self, url: str) -> str:
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            try:
                response = await client.get(url, headers=self._headers())
            except httpx.HTTPError as e:
                logger.error(f"Price lookup request failed for {url}: {e}")
                raise PriceLookupError(str(e)) from e
        if response.status_code >= 400:
            logger.error(f"Price lookup returned HTTP {response.status_code} for {url}")
            raise PriceLookupError(
                f"HTTP {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        return response.text

    async def search(self, model_prefix: str, carrier: Optional[str] = None) -> PriceSearchResult:
        """Find the catalog detail page for a model prefix such as ``MWC62``."""
        slug = to_carrier_slug(carrier)
        search_url = f"{self.base_url}/search/?search-word={quote(model_prefix)}"
        html = await self._get_html(search_url)
        first_link = parse_search_links(html, slug, self.base_url)
        logger.info(f"Price search for {model_prefix} ({slug or 'any carrier'}): {first_link}")
        return PriceSearchResult(
            model_prefix=model_prefix,
            carrier_slug=slug,
            search_url=search_url,
            first_link=first_link,
        )

    async def fetch_price(self, query: str) -> Optional[int]:
        """Highest listed buy-back price for a free-text query."""
        html = await self._get_html(f"{self.base_url}/?s={quote(query)}")
        return parse_price(html)
