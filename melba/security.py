"""Security helpers for HTTP response headers."""
from __future__ import annotations

import copy
from typing import Dict, Iterable, List, Union

from flask import Flask
from flask_talisman import Talisman

CSPDirective = Dict[str, Union[List[str], str]]

STYLE_CDNS = [
    "https://fonts.googleapis.com",
]

FONT_CDNS = [
    "https://fonts.gstatic.com",
]


def _unique(values: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    unique_values: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            unique_values.append(value)
    return unique_values


_STYLE_SOURCES = _unique(["'self'", "'unsafe-inline'", *STYLE_CDNS])
_FONT_SOURCES = _unique(["'self'", *FONT_CDNS])


BASE_CSP: CSPDirective = {
    "default-src": "'self'",
    "script-src": ["'self'"],
    "connect-src": ["'self'"],
    "img-src": ["'self'", "data:"],
    "style-src": list(_STYLE_SOURCES),
    "font-src": list(_FONT_SOURCES),
    "object-src": "'none'",
    "base-uri": "'self'",
    "form-action": "'self'",
    "frame-ancestors": "'self'",
}


def build_csp() -> CSPDirective:
    return copy.deepcopy(BASE_CSP)


def serialize_csp(policy: CSPDirective) -> str:
    parts: List[str] = []
    for directive, value in policy.items():
        if isinstance(value, str):
            parts.append(f"{directive} {value}")
        else:
            parts.append(f"{directive} {' '.join(value)}")
    return "; ".join(parts)


def init_security(app: Flask, production: bool) -> None:
    csp = build_csp()
    app.config["BASE_CONTENT_SECURITY_POLICY"] = serialize_csp(csp)
    talisman.init_app(
        app,
        content_security_policy=csp,
        force_https=production,
        session_cookie_secure=production,
        strict_transport_security=production,
        frame_options="SAMEORIGIN",
    )


talisman = Talisman()
