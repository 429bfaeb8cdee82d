"""Domain service: Access Gate.

Decides, for one request path and the caller's session claim, whether
the request goes through or is redirected. Stateless and single-pass:
no session refresh, no token renewal.
"""

from __future__ import annotations

from dataclasses import dataclass

ADMIN_ROLE = "ADMIN"

LOGIN_PATH = "/login"
HOME_PATH = "/pos"

STATIC_PREFIXES = ("/_next", "/static", "/public")
PUBLIC_PATHS = ("/login", "/api/auth", "/api/auth/", "/favicon.ico")
ADMIN_PREFIXES = ("/inventory", "/users", "/api/users")


@dataclass(frozen=True)
class SessionClaim:
    """The part of a decoded session token the gate looks at."""

    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


@dataclass(frozen=True)
class GateDecision:
    redirect_to: str | None = None

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None

    @staticmethod
    def allow() -> GateDecision:
        return GateDecision()

    @staticmethod
    def redirect(path: str) -> GateDecision:
        return GateDecision(redirect_to=path)


class AccessGate:

    def check(self, path: str, claim: SessionClaim | None) -> GateDecision:
        """Return the decision for ``path``.

        Order matters:
        1. static assets and public paths pass for everyone;
        2. no claim -> login;
        3. admin-only areas need the ADMIN role, anyone else goes to POS;
        4. everything else passes for any authenticated role.
        """
        if path.startswith(STATIC_PREFIXES):
            return GateDecision.allow()

        if any(path == p or path.startswith(p) for p in PUBLIC_PATHS):
            return GateDecision.allow()

        if claim is None:
            return GateDecision.redirect(LOGIN_PATH)

        if path.startswith(ADMIN_PREFIXES) and not claim.is_admin:
            return GateDecision.redirect(HOME_PATH)

        # /pos, /invoice, /api/products, /api/sales and anything else.
        return GateDecision.allow()
