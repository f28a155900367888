"""Link extraction and domain normalization utilities."""

from __future__ import annotations

import re
from typing import Iterable
from urllib.parse import urlparse

import tldextract

# Bundled public-suffix snapshot only: no suffix list fetch, no disk cache.
_extract = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())

_SCHEMES = ("http://", "https://")
_TRAILING = ".,;:!?)]}'\"»"
_LEADING = "([{<'\"«"
_GLUE = re.compile(r"[:=]")


def canonicalize_host(value: str) -> str:
    """
    Normalize a domain/URL to a bare lowercase host.

    - Lowercase
    - Strip leading "www."
    - Ignore port, path, query and fragment
    """
    raw = (value or "").strip()
    if not raw:
        return ""

    candidate = raw if "://" in raw else f"https://{raw}"
    try:
        parsed = urlparse(candidate)
        host = parsed.hostname or ""
    except ValueError:
        return ""
    host = host.strip().lower().strip(".")

    if host.startswith("www.") and len(host) > 4:
        host = host[4:]
    return host


def registered_domain(value: str) -> str:
    """Return the registrable domain for a host or URL (best-effort)."""
    host = canonicalize_host(value)
    if not host:
        return ""
    extracted = _extract(host)
    if extracted.domain and extracted.suffix:
        return f"{extracted.domain}.{extracted.suffix}".lower()
    return host


def is_shortener(value: str, shorteners: Iterable[str]) -> bool:
    """Check whether a token points at a known URL shortener."""
    domain = registered_domain(value)
    return bool(domain) and domain in set(shorteners)


def _clean_token(token: str) -> str:
    return token.lstrip(_LEADING).rstrip(_TRAILING)


def _find_shortener(token: str, shorteners: set[str]) -> str:
    """Return the part of ``token`` that starts at a shortener domain, or "".

    The domain may be glued to a preceding word ("Verify:bit.ly/x").
    """
    if not shorteners or "." not in token:
        return ""
    starts = [0] + [m.end() for m in _GLUE.finditer(token)]
    for start in starts:
        candidate = token[start:]
        if "." in candidate and is_shortener(candidate, shorteners):
            return candidate
    return ""


def extract_links(text: str, shorteners: Iterable[str] = ()) -> list[str]:
    """Return URL-like tokens in order of appearance, without duplicates.

    A token counts as a link when it starts with an http(s) scheme or
    ``www.``, or when its registrable domain is one of ``shorteners``.
    """
    shortener_set = set(shorteners)
    links: list[str] = []
    seen: set[str] = set()

    for raw in (text or "").split():
        token = _clean_token(raw)
        if not token:
            continue
        lower = token.lower()

        if "://" in lower:
            # Scheme may be glued to a preceding word ("at:http://...")
            index = min((lower.find(s) for s in _SCHEMES if s in lower), default=-1)
            if index < 0:
                continue
            token = token[index:]
        elif lower.startswith("www."):
            pass
        else:
            token = _find_shortener(token, shortener_set)
            if not token:
                continue

        if token not in seen:
            seen.add(token)
            links.append(token)

    return links
