"""Top-level domain set and host validation.

The TLD list ships as ``enlace/data/tlds.txt`` (one lowercase label per line,
``#`` starts a comment). It is read once per process into a frozenset and
handed explicitly to the matchers that need it.

Example:
    >>> from enlace.tlds import load_tlds, valid_host
    >>> tlds = load_tlds()
    >>> valid_host("example.com", tlds)
    True
    >>> valid_host("notes.txt", tlds)
    False
    >>> valid_host("192.168.0.1", tlds)
    True

Thread Safety:
The loaded set is immutable and cached; safe to share without locking.

"""

from __future__ import annotations

import re
from functools import cache
from importlib import resources

TldSet = frozenset[str]

# Optional http(s) scheme, optional "user@" (no slashes), then the host
# up to the first port, fragment, tilde, path, query or newline.
_HOSTNAME_RE = re.compile(r"^(?:https?://)?(?:[^@/\n]+@)?(?P<host>[^:#~/\n?]+)")

_OCTET = r"(?:[0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])"
_IPV4_RE = re.compile(rf"^(?:{_OCTET}\.){{3}}{_OCTET}$")


@cache
def load_tlds() -> TldSet:
    """Load the bundled TLD list.

    Cached: the file is read on first call only.

    Returns:
        Frozenset of lowercase TLD labels (without leading dot)
    """
    source = resources.files("enlace").joinpath("data/tlds.txt").read_text(encoding="utf-8")
    return parse_tlds(source)


def parse_tlds(source: str) -> TldSet:
    """Parse a TLD list: one label per line, blank lines and ``#`` comments ignored."""
    labels = set()
    for line in source.splitlines():
        label = line.split("#", 1)[0].strip().lower()
        if label:
            labels.add(label.lstrip("."))
    return frozenset(labels)


def is_ip(host: str) -> bool:
    """Check for a dotted-quad IPv4 address with every octet in 0-255."""
    return _IPV4_RE.match(host) is not None


def extract_host(token: str) -> str | None:
    """Return the host part of a URL or email token, or None if there is none."""
    match = _HOSTNAME_RE.match(token)
    if match is None:
        return None
    return match.group("host")


def valid_host(host: str, tlds: TldSet) -> bool:
    """Check that a host is an IPv4 address or ends in a known TLD.

    A host without any dot has no TLD label and is rejected, which keeps
    internal hostnames, filenames and version numbers from being linked.
    """
    if is_ip(host):
        return True
    if "." not in host:
        return False
    tld = host.rsplit(".", 1)[1].lower()
    return tld in tlds


def valid_tld(token: str, tlds: TldSet) -> bool:
    """Extract the host from a URL/email token and validate it."""
    host = extract_host(token)
    if host is None:
        return False
    return valid_host(host, tlds)


__all__ = [
    "TldSet",
    "extract_host",
    "is_ip",
    "load_tlds",
    "parse_tlds",
    "valid_host",
    "valid_tld",
]
