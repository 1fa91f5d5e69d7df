"""
Unit tests for billing API routes.

The client is authenticated as test_user and shares the frozen-clock
BillingService with the fixtures.
"""

import pytest

from api.main import app
from packages.auth.dependencies import get_current_active_user


@pytest.fixture
def as_user():
    """Switch the authenticated caller for the rest of the test."""

    def _switch(user):
        app.dependency_overrides[get_current_active_user] = lambda: user

    return _switch


@pytest.mark.asyncio
class TestSubscriptionRoutes:
    async def test_order_subscription(
        self, client, sample_team, plans, order_statuses
    ):
        response = await client.post(
            "/api/v1/billing/subscriptions",
            json={"teamId": sample_team.id, "planId": plans["starter"].id},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["kind"] == "status"
        assert data["success"] is True
        assert data["subscriptionId"] is not None
        assert data["orderId"] is not None

    async def test_order_subscription_foreign_team(
        self, client, as_user, other_user, sample_team, plans, order_statuses
    ):
        as_user(other_user)

        response = await client.post(
            "/api/v1/billing/subscriptions",
            json={"teamId": sample_team.id, "planId": plans["starter"].id},
        )

        assert response.status_code == 403
        assert response.json()["error"] == "ForbiddenError"

    async def test_order_subscription_unknown_plan(
        self, client, sample_team, order_statuses
    ):
        response = await client.post(
            "/api/v1/billing/subscriptions",
            json={"teamId": sample_team.id, "planId": 9999},
        )

        assert response.status_code == 404

    async def test_confirm_payment(self, client, ordered_subscription):
        response = await client.post(
            f"/api/v1/billing/subscriptions/{ordered_subscription}/confirm-payment",
            json={"billingCycle": "MONTHLY"},
        )

        assert response.status_code == 200
        assert response.json()["success"] is True

        activation = await client.get(
            f"/api/v1/billing/subscriptions/{ordered_subscription}/activation"
        )
        assert activation.status_code == 200
        assert activation.json()["billingCycle"] == "MONTHLY"

    async def test_confirm_payment_twice(self, client, active_subscription):
        response = await client.post(
            f"/api/v1/billing/subscriptions/{active_subscription}/confirm-payment",
            json={"billingCycle": "MONTHLY"},
        )

        assert response.status_code == 409
        assert response.json()["error"] == "NoPendingOrderError"

    async def test_confirm_payment_bad_cycle(self, client, ordered_subscription):
        response = await client.post(
            f"/api/v1/billing/subscriptions/{ordered_subscription}/confirm-payment",
            json={"billingCycle": "WEEKLY"},
        )

        assert response.status_code == 422

    async def test_upgrade_quote_and_confirm(
        self, client, clock, active_subscription, plans
    ):
        clock.advance(days=11)

        quote = await client.post(
            f"/api/v1/billing/subscriptions/{active_subscription}/upgrade",
            json={"planId": plans["pro"].id},
        )

        assert quote.status_code == 200
        assert quote.json()["kind"] == "price"
        assert quote.json()["value"] == 19

        confirm = await client.post(
            f"/api/v1/billing/subscriptions/{active_subscription}/confirm-upgrade",
            json={"planId": plans["pro"].id, "billingCycle": "YEARLY"},
        )

        assert confirm.status_code == 200
        assert confirm.json()["orderId"] == quote.json()["orderId"]

    async def test_stale_upgrade_conflict(self, client, active_subscription, plans):
        for plan in ("pro", "enterprise"):
            await client.post(
                f"/api/v1/billing/subscriptions/{active_subscription}/upgrade",
                json={"planId": plans[plan].id},
            )
        await client.post(
            f"/api/v1/billing/subscriptions/{active_subscription}/confirm-upgrade",
            json={"planId": plans["enterprise"].id, "billingCycle": "MONTHLY"},
        )

        response = await client.post(
            f"/api/v1/billing/subscriptions/{active_subscription}/confirm-upgrade",
            json={"planId": plans["pro"].id, "billingCycle": "MONTHLY"},
        )

        assert response.status_code == 409
        assert response.json()["error"] == "ConcurrentModificationError"

    async def test_upgrade_to_current_plan(self, client, active_subscription, plans):
        response = await client.post(
            f"/api/v1/billing/subscriptions/{active_subscription}/upgrade",
            json={"planId": plans["starter"].id},
        )

        assert response.status_code == 422

    async def test_order_history(self, client, active_subscription):
        response = await client.get(
            f"/api/v1/billing/subscriptions/{active_subscription}/orders"
        )

        assert response.status_code == 200
        orders = response.json()
        assert len(orders) == 1
        assert orders[0]["status"] == "COMPLETED"
        assert orders[0]["kind"] == "SUBSCRIPTION"
        assert orders[0]["completedAt"] is not None

    async def test_activation_before_payment(self, client, ordered_subscription):
        response = await client.get(
            f"/api/v1/billing/subscriptions/{ordered_subscription}/activation"
        )

        assert response.status_code == 404


@pytest.mark.asyncio
class TestPlanRoutes:
    async def test_list_plans_is_public(self, anonymous_client, plans):
        response = await anonymous_client.get("/api/v1/billing/plans")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["STARTER", "PRO", "ENTERPRISE"]

    async def test_billing_requires_auth(self, anonymous_client):
        response = await anonymous_client.get("/api/v1/billing/subscriptions/1/orders")

        assert response.status_code == 401


@pytest.mark.asyncio
class TestAdminRoutes:
    async def test_add_plan_as_admin(self, client, as_user, admin_user):
        as_user(admin_user)

        response = await client.post(
            "/api/v1/billing/admin/plans", json={"name": "TEAM", "price": 45}
        )

        assert response.status_code == 201
        plans = await client.get("/api/v1/billing/plans")
        assert [(p["name"], p["price"]) for p in plans.json()] == [("TEAM", 45)]

    async def test_add_plan_as_regular_user(self, client):
        response = await client.post(
            "/api/v1/billing/admin/plans", json={"name": "TEAM", "price": 45}
        )

        assert response.status_code == 403

    async def test_add_plan_negative_price(self, client, as_user, admin_user):
        as_user(admin_user)

        response = await client.post(
            "/api/v1/billing/admin/plans", json={"name": "TEAM", "price": -5}
        )

        assert response.status_code == 422

    async def test_add_order_status(self, client, as_user, admin_user):
        as_user(admin_user)

        response = await client.post(
            "/api/v1/billing/admin/order-statuses", json={"name": "PENDING"}
        )

        assert response.status_code == 201
        assert response.json()["success"] is True

    async def test_add_duplicate_order_status(
        self, client, as_user, admin_user, order_statuses
    ):
        as_user(admin_user)

        response = await client.post(
            "/api/v1/billing/admin/order-statuses", json={"name": "PENDING"}
        )

        assert response.status_code == 500
        assert response.json()["error"] == "PersistenceError"
