"""URI to remote URL translation.

A DAM URI looks like ``damedia://<target>``. It is turned into a concrete
HTTP URL by applying an ordered list of literal substring substitutions, one
after another, to the whole URI. The default list has two rules: the scheme
prefix becomes the DAM files base URL, and the derivative (image style)
segment becomes the DAM public segment.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

__all__ = [
    "RewriteRule",
    "default_rules",
    "translate",
    "split_uri",
    "get_target",
    "dirname",
]


@dataclass(frozen=True)
class RewriteRule:
    """A literal ``pattern`` -> ``replacement`` substitution."""

    pattern: str
    replacement: str

    def apply(self, value: str) -> str:
        return value.replace(self.pattern, self.replacement)


def default_rules(
    scheme: str,
    base_url: str,
    derivative_segment: Optional[str] = None,
    public_segment: Optional[str] = None,
) -> Tuple[RewriteRule, ...]:
    """Build the standard rule list for a scheme.

    Parameters:
        scheme: URI scheme without ``://`` (e.g. ``damedia``).
        base_url: URL that replaces ``scheme://`` for original assets.
        derivative_segment: Path segment used by derivative/preset URIs.
            Defaults to the scheme name.
        public_segment: Segment the derivative segment is rewritten to.
            Defaults to ``public``.

    Returns:
        Tuple of rules: the base rule first, then the derivative rule.
    """
    derivative_segment = (derivative_segment or scheme).strip("/")
    public_segment = (public_segment or "public").strip("/")
    return (
        RewriteRule(f"{scheme}://", base_url),
        RewriteRule(f"/{derivative_segment}/", f"/{public_segment}/"),
    )


def translate(uri: str, rules: Sequence[RewriteRule]) -> str:
    """Apply ``rules`` in order to ``uri`` and return the remote URL."""
    url = uri
    for rule in rules:
        url = rule.apply(url)
    return url


def split_uri(uri: str) -> Tuple[str, str]:
    """Split ``scheme://target`` into ``(scheme, target)``.

    Raises:
        ValueError: If ``uri`` has no ``://`` separator.
    """
    scheme, sep, target = uri.partition("://")
    if not sep:
        raise ValueError(f"Not a scheme URI: {uri!r}")
    return scheme, target


def get_target(uri: str) -> str:
    """Return the target of ``uri`` with leading/trailing slashes and backslashes removed."""
    _, target = split_uri(uri)
    return target.strip("/\\")


def dirname(uri: str) -> str:
    """Return ``scheme://`` followed by the parent of the URI's target.

    >>> dirname("damedia://images/photo.jpg")
    'damedia://images'
    >>> dirname("damedia://photo.jpg")
    'damedia://'
    """
    scheme, target = split_uri(uri)
    parent = posixpath.dirname(target)
    if parent == ".":
        parent = ""
    return f"{scheme}://{parent}"
