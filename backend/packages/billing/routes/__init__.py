"""Billing API routes."""

from packages.billing.routes import admin, billing, plans

__all__ = ["admin", "billing", "plans"]
