"""
Page gating table.

Maps page paths of the web app to the minimum tier needed to open them.
The frontend asks GET /api/access before rendering a gated page.
"""

from .models import Tier

# Pages anyone may open without a session
PUBLIC_ROUTES = frozenset(
    {
        "/",
        "/about",
        "/discover",
        "/program",
        "/clarity-check",
        "/clarity-check-numeric",
        "/info-session",
        "/contact",
        "/privacy",
        "/terms",
        "/google-review",
        "/starter-pack",
        "/ai-blueprint",
        "/ethics",
        "/orientation",
        "/login",
        "/signup",
        "/enrollment-required",
        "/robots.txt",
        "/sitemap.xml",
    }
)

PUBLIC_PREFIXES = ("/api/auth/",)

# Route prefix -> minimum tier
GATED_ROUTES: dict[str, Tier] = {
    "/community": Tier.STARTER,
    "/soul": Tier.DEEPENING,
    "/systems": Tier.DEEPENING,
    "/insights": Tier.DEEPENING,
    "/creation": Tier.DEEPENING,
    "/interpretation": Tier.DEEPENING,
    "/ai-tools": Tier.STARTER,
    "/labs": Tier.FREE,
    "/integration": Tier.STARTER,
}


def normalize_path(path: str) -> str:
    path = path.split("?", 1)[0].split("#", 1)[0].strip() or "/"
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def is_public_path(path: str) -> bool:
    path = normalize_path(path)
    if path in PUBLIC_ROUTES:
        return True
    return path == "/api/auth" or any(path.startswith(prefix) for prefix in PUBLIC_PREFIXES)


def required_tier_for(path: str) -> Tier:
    """Minimum tier for a page path; ungated pages need FREE."""
    path = normalize_path(path)
    for route, tier in GATED_ROUTES.items():
        if path == route or path.startswith(route + "/"):
            return tier
    return Tier.FREE
