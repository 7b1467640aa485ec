"""Input validators for app names, package identifiers, schemes and domains.

All validators are pure predicates: they take a string and answer whether it
matches a fixed pattern.  Surrounding whitespace is *not* stripped here;
callers normalize user input before validating.
"""

from __future__ import annotations

import re

# Letter first, then letters/digits/dash/underscore; 3-50 chars total.
_APP_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]{2,49}$")

# Two or more dot-separated lowercase segments, e.g. com.acme.app
_PACKAGE_NAME_RE = re.compile(r"^[a-z][a-z0-9]*(\.[a-z][a-z0-9]*)+$")

# Custom URL scheme: 3-20 chars, lowercase, letter first.
_APP_SCHEME_RE = re.compile(r"^[a-z][a-z0-9-]{2,19}$")

# label(.label)*.tld where labels may contain inner hyphens.
_DOMAIN_RE = re.compile(
    r"^(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}$"
)


def is_valid_app_name(name: str) -> bool:
    """Return True if *name* can be used as the project directory / app name."""
    return bool(_APP_NAME_RE.fullmatch(name))


def is_valid_package_name(name: str) -> bool:
    """Return True if *name* is a reverse-DNS identifier usable on iOS and Android."""
    return bool(_PACKAGE_NAME_RE.fullmatch(name))


def is_valid_app_scheme(scheme: str) -> bool:
    """Return True if *scheme* is a valid custom deep-link scheme."""
    return bool(_APP_SCHEME_RE.fullmatch(scheme))


def is_valid_domain(domain: str) -> bool:
    """Return True if *domain* looks like a host name with a TLD."""
    return bool(_DOMAIN_RE.fullmatch(domain))


def suggest_package_name(app_name: str, *, org: str = "com.example") -> str:
    """Derive a default package identifier from an app name.

    >>> suggest_package_name("My-Cool_App")
    'com.example.mycoolapp'
    """
    slug = re.sub(r"[^a-z0-9]", "", app_name.lower())
    if not slug or not slug[0].isalpha():
        slug = "app" + slug
    return f"{org}.{slug}"
