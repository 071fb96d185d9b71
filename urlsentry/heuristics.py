"""
Heuristic URL analysis for urlsentry.

This module inspects a URL string for phishing indicators (keywords in the
host or path, URL shorteners, brand impersonation, raw IP hosts, excessive
subdomains, plain HTTP) and returns a risk status, a 0-100 score and
human-readable reasons.

Nothing here touches the network: every check is a closed-form rule over the
URL string, and the public-suffix lookup uses the snapshot bundled with
tldextract.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional
from urllib.parse import urlsplit

import tldextract


logger = logging.getLogger(__name__)

SAFE = "safe"
SUSPICIOUS = "suspicious"
DANGEROUS = "dangerous"

SUSPICIOUS_KEYWORDS = (
    "login", "verify", "update", "urgent", "suspend", "confirm", "security",
    "paypal", "amazon", "netflix", "microsoft", "google", "facebook",
    "bank", "secure", "account", "expired", "limited", "restricted",
)

# Real hosts that legitimately carry a suspicious keyword. Matched as
# substrings of the hostname, and only for the hostname keyword rule.
LEGITIMATE_DOMAINS = (
    "login.microsoftonline.com",
    "accounts.google.com",
    "secure.paypal.com",
    "login.live.com",
    "www.google.com",
)

URL_SHORTENERS = ("bit.ly", "tinyurl.com", "t.co", "short.link", "tiny.cc")

COMMON_BRANDS = ("paypal", "amazon", "microsoft", "google", "apple", "netflix")

# Characters a browser refuses in a host name.
FORBIDDEN_HOST_CHARS = frozenset(' <>^|%\\"`{}\x7f') | frozenset(map(chr, range(0x20)))

IP_PREFIX_RE = re.compile(r"^\d+\.\d+\.\d+\.\d+")

DOMAIN_KEYWORD_SCORE = 30
PATH_KEYWORD_SCORE = 20
SHORTENER_SCORE = 25
HYPHEN_PATTERN_SCORE = 15
BRAND_IMPERSONATION_SCORE = 40
RAW_IP_SCORE = 35
EXCESSIVE_SUBDOMAINS_SCORE = 20
PLAIN_HTTP_SCORE = 15

MAX_SCORE = 100
DANGEROUS_THRESHOLD = 50
SUSPICIOUS_THRESHOLD = 25

MAX_HYPHEN_SEGMENTS = 3
MAX_HOST_LABELS = 4

INVALID_URL_SCORE = 30
INVALID_URL_REASONS = ("Invalid URL format", "Could not properly analyze URL")
NO_RED_FLAGS_REASON = "No obvious red flags detected"

STATUS_SUMMARIES = {
    DANGEROUS: "High risk of phishing",
    SUSPICIOUS: "Potential security concerns",
}

# Offline extractor: no suffix-list download, no disk cache.
_EXTRACT = tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None)


@dataclass
class UrlCheckResult:
    status: str
    score: int
    reasons: List[str] = field(default_factory=list)
    features: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ParsedUrl(NamedTuple):
    scheme: str
    hostname: str
    path: str
    full: str


def normalize_url(url: str) -> str:
    """Strip surrounding whitespace and default to https:// when no scheme is given."""
    url = url.strip()
    if not url.startswith("http://") and not url.startswith("https://"):
        url = "https://" + url
    return url


def parse_url(url: str) -> Optional[ParsedUrl]:
    """
    Split a normalized URL into the parts the rules look at.

    Returns None when the string is not a usable URL (no host, a host with
    forbidden characters, a bad port, or a host that cannot be IDNA-encoded).
    """
    try:
        parts = urlsplit(url)
        # Accessing .port validates it.
        parts.port
    except ValueError:
        return None

    hostname = parts.hostname
    if not hostname:
        return None
    if any(c in FORBIDDEN_HOST_CHARS for c in hostname):
        return None
    if not hostname.isascii():
        try:
            hostname = hostname.encode("idna").decode("ascii")
        except UnicodeError:
            return None

    return ParsedUrl(
        scheme=parts.scheme.lower(),
        hostname=hostname.lower(),
        path=(parts.path or "/").lower(),
        full=url.lower(),
    )


def is_legitimate_use(hostname: str) -> bool:
    return any(legit in hostname for legit in LEGITIMATE_DOMAINS)


def classify_score(score: int) -> str:
    """Map a clamped score to safe / suspicious / dangerous."""
    if score >= DANGEROUS_THRESHOLD:
        return DANGEROUS
    if score >= SUSPICIOUS_THRESHOLD:
        return SUSPICIOUS
    return SAFE


def invalid_url_result() -> UrlCheckResult:
    return UrlCheckResult(
        status=SUSPICIOUS,
        score=INVALID_URL_SCORE,
        reasons=list(INVALID_URL_REASONS),
    )


def _host_features(parsed: ParsedUrl) -> Dict[str, Any]:
    ext = _EXTRACT(parsed.hostname)
    registered = f"{ext.domain}.{ext.suffix}" if ext.domain and ext.suffix else ""
    return {
        "scheme": parsed.scheme,
        "hostname": parsed.hostname,
        "path": parsed.path,
        "tld": (ext.suffix or "").lower(),
        "registered_domain": registered.lower(),
        "normalized_url": parsed.full,
    }


def analyze_url(url: str) -> UrlCheckResult:
    """
    Analyze a URL and return its risk status, score and reasons.

    Rules are evaluated in a fixed order and their reasons are kept in that
    order. The status summary, when there is one, goes first. A string that
    cannot be parsed as a URL is itself treated as suspicious; this function
    never raises for bad input.
    """
    parsed = parse_url(normalize_url(url))
    if parsed is None:
        logger.debug("Could not parse %r as a URL", url)
        return invalid_url_result()

    host = parsed.hostname
    path = parsed.path

    score = 0
    reasons: List[str] = []
    features = _host_features(parsed)

    # Keywords in the hostname, unless the host is a known legitimate one
    host_keywords = [kw for kw in SUSPICIOUS_KEYWORDS if kw in host]
    features["matched_keywords"] = host_keywords
    if host_keywords and not is_legitimate_use(host):
        score += DOMAIN_KEYWORD_SCORE
        reasons.append("Domain contains suspicious keywords")

    # Keywords in the path (no allowlist here)
    if any(kw in path for kw in SUSPICIOUS_KEYWORDS):
        score += PATH_KEYWORD_SCORE
        reasons.append("URL path contains phishing-related terms")

    if any(shortener in host for shortener in URL_SHORTENERS):
        score += SHORTENER_SCORE
        reasons.append("Uses URL shortening service")

    if "-" in host and len(host.split("-")) > MAX_HYPHEN_SEGMENTS:
        score += HYPHEN_PATTERN_SCORE
        reasons.append("Domain has suspicious hyphen pattern")

    # Brand impersonation adds up once per brand
    for brand in COMMON_BRANDS:
        if brand in host and not host.endswith((f"{brand}.com", f"{brand}.net")):
            score += BRAND_IMPERSONATION_SCORE
            reasons.append(f"Potentially impersonating {brand}")

    if IP_PREFIX_RE.match(host):
        score += RAW_IP_SCORE
        reasons.append("Uses IP address instead of domain name")

    if len(host.split(".")) > MAX_HOST_LABELS:
        score += EXCESSIVE_SUBDOMAINS_SCORE
        reasons.append("Excessive subdomains detected")

    if parsed.scheme == "http":
        score += PLAIN_HTTP_SCORE
        reasons.append("Not using secure HTTPS connection")

    features["raw_score"] = score
    score = min(score, MAX_SCORE)
    status = classify_score(score)

    summary = STATUS_SUMMARIES.get(status)
    if summary:
        reasons.insert(0, summary)
    elif not reasons:
        reasons.append(NO_RED_FLAGS_REASON)

    return UrlCheckResult(status=status, score=score, reasons=reasons, features=features)
