"""Homepage scraper: fetch URL and extract business-audit signals.

Extracts headings, navigation and CTA text, contact artifacts, social links,
trust markers and page-presence flags. Every signal reads the same parsed
tree (never mutated) plus the raw body, so they can be computed in any order.
Does NOT crawl subpages.
"""

import logging
import re
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Iterable

import requests
from requests.compat import chardet
from bs4 import BeautifulSoup, Comment, Declaration, Doctype, ProcessingInstruction

from config import (
    FETCH_TIMEOUT_SECONDS,
    MAX_BODY_TEXT_CHARS,
    MAX_CTA_BUTTONS,
    MAX_EMAILS,
    MAX_MENU_ITEMS,
    MAX_PHONE_NUMBERS,
    MAX_REDIRECTS,
)
from errors import FetchError
from models import SignalRecord, SocialLink

logger = logging.getLogger(__name__)

_REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

MENU_SELECTOR = "nav a, header a, .nav a, .menu a, .navbar a"
CTA_SELECTOR = "button, .btn, [class*='cta'], [class*='button'], a[class*='btn']"
ADDRESS_SELECTOR = "[class*='address'], [id*='address'], address"
TESTIMONIAL_SELECTOR = "[class*='testimonial'], [class*='review'], [class*='quote'], blockquote"

PAGE_LINK_SELECTORS = {
    "has_about_page": "a[href*='about']",
    "has_services_page": "a[href*='service'], a[href*='product']",
    "has_blog": "a[href*='blog'], a[href*='news'], a[href*='article']",
    "has_privacy_policy": "a[href*='privacy']",
    "has_terms_of_service": "a[href*='terms'], a[href*='tos']",
}

CHAT_VENDOR_MARKERS = ("intercom", "drift", "zendesk", "tawk", "crisp", "livechat")

# Loose on purpose: also catches dates, prices and other long digit runs.
PHONE_PATTERN = re.compile(
    r"[\+]?[(]?[0-9]{1,3}[)]?[-\s\.]?[(]?[0-9]{1,4}[)]?[-\s\.]?[0-9]{1,4}[-\s\.]?[0-9]{1,9}"
)
PHONE_MIN_LENGTH = 10
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

SOCIAL_PATTERNS = [
    ("LinkedIn", re.compile(r"linkedin\.com", re.I)),
    ("Facebook", re.compile(r"facebook\.com", re.I)),
    ("Twitter", re.compile(r"twitter\.com|x\.com", re.I)),
    ("Instagram", re.compile(r"instagram\.com", re.I)),
    ("YouTube", re.compile(r"youtube\.com", re.I)),
]

_NON_VISIBLE_TAGS = {"script", "style", "noscript", "template"}
_NON_TEXT_NODES = (Comment, Declaration, Doctype, ProcessingInstruction)

FETCH_CHUNK_BYTES = 8192


def _clean_text(el) -> str:
    return " ".join(el.get_text(" ").split())


def _unique(values: Iterable[str], limit: int | None = None) -> tuple[str, ...]:
    deduped = list(dict.fromkeys(values))
    if limit is not None:
        deduped = deduped[:limit]
    return tuple(deduped)


def _download(session: requests.Session, url: str, deadline: float) -> tuple[requests.Response, bytes]:
    response = session.get(url, timeout=FETCH_TIMEOUT_SECONDS, headers=_REQUEST_HEADERS, stream=True)
    response.raise_for_status()

    content_type = response.headers.get("Content-Type", "")
    if content_type and "html" not in content_type.lower() and "xml" not in content_type.lower():
        response.close()
        raise FetchError(f"Failed to scrape website: unsupported content type '{content_type}'")

    chunks = []
    for chunk in response.iter_content(chunk_size=FETCH_CHUNK_BYTES):
        if time.monotonic() > deadline:
            response.close()
            raise FetchError(f"Failed to scrape website: timed out after {FETCH_TIMEOUT_SECONDS}s")
        chunks.append(chunk)
    return response, b"".join(chunks)


def _decode(body: bytes) -> str:
    encoding = chardet.detect(body).get("encoding") or "utf-8"
    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


def _fetch_html(url: str) -> str:
    """
    GET `url` within a hard FETCH_TIMEOUT_SECONDS ceiling covering connect,
    redirects and the whole body. The socket timeout alone only bounds each
    read, so the download runs in a worker and the caller stops waiting at
    the deadline.
    """
    deadline = time.monotonic() + FETCH_TIMEOUT_SECONDS
    session = requests.Session()
    session.max_redirects = MAX_REDIRECTS
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="fetch")
    try:
        future = executor.submit(_download, session, url, deadline)
        try:
            response, body = future.result(timeout=FETCH_TIMEOUT_SECONDS)
        except FuturesTimeoutError as exc:
            raise FetchError(f"Failed to scrape website: timed out after {FETCH_TIMEOUT_SECONDS}s") from exc
        except requests.RequestException as exc:
            raise FetchError(f"Failed to scrape website: {exc}") from exc
    finally:
        executor.shutdown(wait=False)
        session.close()

    logger.info(
        "Fetched %s status=%s bytes=%d redirects=%d",
        url,
        response.status_code,
        len(body),
        len(response.history),
    )
    return _decode(body)


def _menu_items(soup: BeautifulSoup) -> tuple[str, ...]:
    items = []
    for el in soup.select(MENU_SELECTOR):
        text = _clean_text(el)
        if text and len(text) < 50 and "http" not in text:
            items.append(text)
    return _unique(items, MAX_MENU_ITEMS)


def _cta_buttons(soup: BeautifulSoup) -> tuple[str, ...]:
    buttons = []
    for el in soup.select(CTA_SELECTOR):
        text = _clean_text(el)
        if text and len(text) < 50:
            buttons.append(text)
    return _unique(buttons, MAX_CTA_BUTTONS)


def _h1_tags(soup: BeautifulSoup) -> tuple[str, ...]:
    return _unique(text for text in (_clean_text(h) for h in soup.find_all("h1")) if text)


def _hero_text(soup: BeautifulSoup) -> str:
    for h1 in soup.find_all("h1"):
        text = _clean_text(h1)
        if text:
            return text
    h2 = soup.find("h2")
    return _clean_text(h2) if h2 else ""


def _has_contact_form(soup: BeautifulSoup) -> bool:
    return bool(soup.select_one("form, [id*='contact'], [class*='contact']"))


def _has_live_chat(soup: BeautifulSoup, raw_html: str) -> bool:
    if soup.select_one("[class*='chat'], [id*='chat']"):
        return True
    return any(marker in raw_html for marker in CHAT_VENDOR_MARKERS)


def _phone_numbers(raw_html: str) -> tuple[str, ...]:
    matches = (m for m in PHONE_PATTERN.findall(raw_html) if len(m) >= PHONE_MIN_LENGTH)
    return _unique(matches, MAX_PHONE_NUMBERS)


def _emails(raw_html: str) -> tuple[str, ...]:
    return _unique(EMAIL_PATTERN.findall(raw_html), MAX_EMAILS)


def _addresses(soup: BeautifulSoup) -> tuple[str, ...]:
    found = []
    for el in soup.select(ADDRESS_SELECTOR):
        text = _clean_text(el)
        if text and len(text) < 200:
            found.append(text)
    return _unique(found)


def _social_links(soup: BeautifulSoup) -> tuple[SocialLink, ...]:
    links: dict[str, SocialLink] = {}
    for a in soup.find_all("a", href=True):
        href = a.get("href") or ""
        for platform, pattern in SOCIAL_PATTERNS:
            if platform not in links and pattern.search(href):
                links[platform] = SocialLink(platform=platform, url=href)
    return tuple(links.values())


def _visible_text(soup: BeautifulSoup) -> str:
    root = soup.body or soup
    chunks = []
    for node in root.find_all(string=True):
        if isinstance(node, _NON_TEXT_NODES) or node.parent is None:
            continue
        if node.parent.name in _NON_VISIBLE_TAGS:
            continue
        chunks.append(node)
    return " ".join(" ".join(chunks).split())[:MAX_BODY_TEXT_CHARS]


def parse_signals(html: str, url: str) -> SignalRecord:
    """
    Build a SignalRecord from an already fetched page. Pure: the same
    html and url always produce the same record.
    """
    soup = BeautifulSoup(html, "html.parser")

    meta_description = ""
    meta_desc_tag = soup.find("meta", attrs={"name": "description"})
    if meta_desc_tag and meta_desc_tag.get("content"):
        meta_description = (meta_desc_tag["content"] or "").strip()

    title = soup.title.get_text().strip() if soup.title else ""

    page_flags = {name: bool(soup.select_one(selector)) for name, selector in PAGE_LINK_SELECTORS.items()}

    return SignalRecord(
        url=url,
        title=title,
        meta_description=meta_description,
        h1_tags=_h1_tags(soup),
        hero_text=_hero_text(soup),
        menu_items=_menu_items(soup),
        cta_buttons=_cta_buttons(soup),
        has_contact_form=_has_contact_form(soup),
        has_live_chat=_has_live_chat(soup, html),
        phone_numbers=_phone_numbers(html),
        emails=_emails(html),
        addresses=_addresses(soup),
        social_links=_social_links(soup),
        testimonials=len(soup.select(TESTIMONIAL_SELECTOR)),
        body_text=_visible_text(soup),
        image_count=len(soup.find_all("img")),
        has_https=url.startswith("https"),
        **page_flags,
    )


def extract_signals(url: str) -> SignalRecord:
    """
    Fetch the page at `url` and return its SignalRecord.
    Raises FetchError on network failure, timeout, redirect loop, HTTP error
    status or a non-HTML response.
    """
    html = _fetch_html(url)
    signals = parse_signals(html, url)
    logger.info(
        "Extracted signals for %s: menu=%d cta=%d phones=%d emails=%d social=%d images=%d",
        url,
        len(signals.menu_items),
        len(signals.cta_buttons),
        len(signals.phone_numbers),
        len(signals.emails),
        len(signals.social_links),
        signals.image_count,
    )
    return signals
