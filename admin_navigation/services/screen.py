from __future__ import annotations

DEFAULT_MANAGED_PREFIX = "/admin/store/"


def normalize_prefix(prefix: str) -> str:
    prefix = "/" + prefix.strip("/")
    return prefix if prefix == "/" else prefix + "/"


def is_managed_page(path: str, managed_prefix: str = DEFAULT_MANAGED_PREFIX) -> bool:
    """True when *path* is an admin page rendered by this application."""
    if not path:
        return False
    prefix = normalize_prefix(managed_prefix)
    candidate = path if path.endswith("/") else path + "/"
    return candidate.startswith(prefix)
