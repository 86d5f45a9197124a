"""Base URL setup for tasks that build absolute links."""

from __future__ import annotations

import re
from dataclasses import dataclass

_BARE_HOST = re.compile(r"^https?://[^/]+$")
_HTTPS = re.compile(r"(https)://", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class SiteContext:
    """Base URL a task runs against and whether it is served over TLS."""

    base_url: str
    secure: bool


def configure_domain(domain_name: str = "", default_domain: str = "") -> SiteContext:
    """Build the site context from ``domain_name`` or the configured default.

    A bare ``scheme://host`` gets a trailing slash.
    """

    domain = domain_name or default_domain
    base_url = f"{domain}/" if _BARE_HOST.match(domain) else domain
    return SiteContext(base_url=base_url, secure=len(_HTTPS.findall(base_url)) == 1)
