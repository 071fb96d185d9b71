"""
Scoring and enrichment logic for urlsentry.

This module wraps the heuristic analysis of a URL into a plain dict
carrying the input URL, status, score, reasons and a recommendation,
suitable for CLI and API consumers.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .heuristics import DANGEROUS, SUSPICIOUS, analyze_url


RECOMMENDATIONS = {
    DANGEROUS: "Do not visit this URL. It shows high-risk phishing indicators.",
    SUSPICIOUS: (
        "Exercise caution. Verify the URL's legitimacy before entering "
        "any personal information."
    ),
}


def recommendation_for(status: str) -> Optional[str]:
    return RECOMMENDATIONS.get(status)


def enrich_score(url: str) -> Dict[str, Any]:
    """
    Run the heuristics on a URL and return an enriched result.

    Returns a dict with:
      - url
      - status: 'safe' | 'suspicious' | 'dangerous'
      - score (int, 0-100)
      - reasons: list[str]
      - features: dict of diagnostic values
      - recommendation: str, or None for safe URLs
    """
    result = analyze_url(url)
    return {
        "url": url,
        **result.to_dict(),
        "recommendation": recommendation_for(result.status),
    }


def enrich_scores(urls: List[str]) -> List[Dict[str, Any]]:
    """Score a list of URLs, keeping input order."""
    return [enrich_score(u) for u in urls]
