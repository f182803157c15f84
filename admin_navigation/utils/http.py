from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from flask import Request, has_request_context, request

__all__ = ["safe_local_path", "wants_json"]

JSON_MIMETYPE = "application/json"
HTML_MIMETYPE = "text/html"


def wants_json(req: Optional[Request] = None) -> bool:
    """
    Determine whether the active request favors a JSON response.

    API routes (``/admin/api/...``) and JSON bodies always get JSON; otherwise
    compare the accepted mimetypes.
    """
    req = req or (request if has_request_context() else None)
    if req is None:
        return False

    if "/api/" in req.path or req.is_json:
        return True

    accept = getattr(req, "accept_mimetypes", None)
    if not accept:
        return False

    if accept.best == JSON_MIMETYPE:
        return True
    return accept[JSON_MIMETYPE] > accept[HTML_MIMETYPE]


def safe_local_path(candidate: Optional[str]) -> Optional[str]:
    """Return *candidate* only when it is a same-site absolute path."""
    if not isinstance(candidate, str) or not candidate:
        return None
    candidate = candidate.strip()
    if not candidate.startswith("/") or candidate.startswith("//") or "\\" in candidate:
        return None
    parts = urlsplit(candidate)
    if parts.scheme or parts.netloc:
        return None
    return candidate
