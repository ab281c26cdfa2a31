"""Links into the OnixS FIX dictionary used in generated doc comments."""

from __future__ import annotations

import re

ONIXS_BASE_URL = "https://www.onixs.biz/fix-dictionary"

_VERSION_RE = re.compile(r"^FIXT?\.(\d+)\.(\d+)(?:SP(\d+))?$", re.IGNORECASE)


def onixs_version_slug(version: str) -> str:
    """FIX.4.4 -> 4.4, FIX.5.0SP2 -> 5.0.sp2."""
    match = _VERSION_RE.match(version.strip())
    if match is None:
        return version.strip().lower()
    major, minor, service_pack = match.groups()
    slug = f"{major}.{minor}"
    if service_pack:
        slug += f".sp{service_pack}"
    return slug


def onixs_field_url(version: str, tag: int) -> str:
    return f"{ONIXS_BASE_URL}/{onixs_version_slug(version)}/tagnum_{tag}.html"
