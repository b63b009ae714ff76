"""
API handlers.

Route registration for all endpoints.
"""

from aiohttp import web

from api.handlers import balance, deposit, health, referral


def register_routes(app: web.Application) -> None:
    """Register all API routes."""
    app.router.add_get("/api/referral", referral.get_referral)
    app.router.add_post("/api/register", referral.register)
    app.router.add_get("/api/inviter", referral.get_inviter)
    app.router.add_get("/api/team", referral.get_team)

    app.router.add_get("/api/balance", balance.get_balance)
    app.router.add_post("/api/claim", balance.claim)
    app.router.add_get("/api/earnings-history", balance.get_earnings_history)

    app.router.add_post("/api/deposit", deposit.create_deposit)

    app.router.add_get("/api/health", health.health_handler)
    app.router.add_get("/api/readiness", health.readiness_handler)


__all__ = ["register_routes"]
