import re
import unittest
from datetime import datetime, timedelta, timezone

from fitness_api.services.payments import generate_invoice_number
from fitness_api.services.subscriptions import period_end
from tests.helpers import ApiClientMixin


def _plan(tier, price, name=None):
    return {"name": name or tier.title(), "tier": tier, "monthly_price": price, "features": ["x"]}


class MembershipPlanApiTests(ApiClientMixin, unittest.TestCase):
    def setUp(self):
        self.start_client()
        self.admin = self.auth_headers("admin@example.com", role="ADMIN")

    def test_one_plan_per_tier(self):
        first = self.client.post("/api/v1/membership-plans/", headers=self.admin, json=_plan("BASIC", 100))
        self.assertEqual(first.status_code, 201, first.text)
        self.assertEqual(first.json()["currency"], "LSL")
        again = self.client.post("/api/v1/membership-plans/", headers=self.admin, json=_plan("BASIC", 120))
        self.assertEqual(again.status_code, 409)

    def test_price_must_be_positive(self):
        resp = self.client.post("/api/v1/membership-plans/", headers=self.admin, json=_plan("VIP", 0))
        self.assertEqual(resp.status_code, 400)

    def test_public_listing_is_active_and_ordered_by_price(self):
        self.client.post("/api/v1/membership-plans/", headers=self.admin, json=_plan("VIP", 500))
        self.client.post("/api/v1/membership-plans/", headers=self.admin, json=_plan("BASIC", 100))
        premium = self.client.post("/api/v1/membership-plans/", headers=self.admin, json=_plan("PREMIUM", 300)).json()
        self.client.put(f"/api/v1/membership-plans/{premium['id']}", headers=self.admin, json={"is_active": False})

        public = self.client.get("/api/v1/membership-plans/")
        self.assertEqual(public.status_code, 200)
        self.assertEqual([p["tier"] for p in public.json()], ["BASIC", "VIP"])
        everything = self.client.get("/api/v1/membership-plans/all").json()
        self.assertEqual([p["tier"] for p in everything], ["BASIC", "PREMIUM", "VIP"])

    def test_only_admin_manages_plans(self):
        client = self.auth_headers("c@example.com")
        resp = self.client.post("/api/v1/membership-plans/", headers=client, json=_plan("BASIC", 100))
        self.assertEqual(resp.status_code, 403)


class SeedPlansTests(ApiClientMixin, unittest.TestCase):
    settings_overrides = {"SEED_PLANS": True}

    def setUp(self):
        self.start_client()

    def test_paid_tiers_are_seeded(self):
        tiers = [p["tier"] for p in self.client.get("/api/v1/membership-plans/").json()]
        self.assertEqual(tiers, ["BASIC", "PREMIUM", "VIP"])


class MembershipApiTests(ApiClientMixin, unittest.TestCase):
    def setUp(self):
        self.start_client()
        self.user = self.auth_headers("m@example.com")
        self.admin = self.auth_headers("admin@example.com", role="ADMIN")

    def _body(self, start_offset=-1, end_offset=30, amount=150, tier="PREMIUM"):
        now = datetime.now(timezone.utc)
        return {
            "tier": tier,
            "start_date": (now + timedelta(days=start_offset)).isoformat(),
            "end_date": (now + timedelta(days=end_offset)).isoformat(),
            "amount": amount,
        }

    def _request(self, body):
        resp = self.client.post("/api/v1/memberships/", headers=self.user, json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def _activate(self, membership_id):
        resp = self.client.patch(f"/api/v1/memberships/{membership_id}/status",
                                 headers=self.admin, json={"status": "ACTIVE"})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def _tier(self):
        return self.client.get("/api/v1/workouts/membership-info", headers=self.user).json()["current_tier"]

    def test_dates_and_amount_validated(self):
        self.assertEqual(self.client.post("/api/v1/memberships/", headers=self.user,
                                          json=self._body(start_offset=5, end_offset=1)).status_code, 400)
        self.assertEqual(self.client.post("/api/v1/memberships/", headers=self.user,
                                          json=self._body(amount=0)).status_code, 400)

    def test_self_service_membership_is_pending_until_activated(self):
        created = self._request(self._body(tier="VIP", amount=0.01))
        self.assertEqual(created["status"], "PENDING")
        self.assertEqual(self._tier(), "FREE")
        self.assertIsNone(self.client.get("/api/v1/memberships/active", headers=self.user).json())

        own = self.client.patch(f"/api/v1/memberships/{created['id']}/status",
                                headers=self.user, json={"status": "ACTIVE"})
        self.assertEqual(own.status_code, 403)
        self.assertEqual(self._tier(), "FREE")

        self._activate(created["id"])
        self.assertEqual(self._tier(), "VIP")

    def test_highest_live_tier_wins(self):
        vip = self._request(self._body(tier="VIP", end_offset=30))
        basic = self._request(self._body(tier="BASIC", end_offset=365))
        self._activate(vip["id"])
        self._activate(basic["id"])
        self.assertEqual(self._tier(), "VIP")
        active = self.client.get("/api/v1/memberships/active", headers=self.user).json()
        self.assertEqual(active["id"], vip["id"])

    def test_offset_end_date_is_stored_as_utc(self):
        minus_five = timezone(timedelta(hours=-5))
        now = datetime.now(timezone.utc)
        created = self._request({
            "tier": "BASIC",
            "start_date": (now - timedelta(days=1)).astimezone(minus_five).isoformat(),
            "end_date": (now + timedelta(hours=2)).astimezone(minus_five).isoformat(),
            "amount": 150,
        })
        self._activate(created["id"])
        self.assertEqual(self._tier(), "BASIC")

    def test_active_and_cancel(self):
        mid = self._request(self._body())["id"]
        self._activate(mid)
        active = self.client.get("/api/v1/memberships/active", headers=self.user).json()
        self.assertEqual(active["id"], mid)

        other = self.auth_headers("other@example.com")
        self.assertEqual(self.client.patch(f"/api/v1/memberships/{mid}/cancel", headers=other).status_code, 403)

        cancelled = self.client.patch(f"/api/v1/memberships/{mid}/cancel", headers=self.user)
        self.assertEqual(cancelled.status_code, 200)
        self.assertEqual(cancelled.json()["status"], "CANCELLED")
        self.assertFalse(cancelled.json()["auto_renew"])
        self.assertIsNone(self.client.get("/api/v1/memberships/active", headers=self.user).json())

    def test_expired_membership_does_not_grant_tier(self):
        expired = self._request(self._body(start_offset=-40, end_offset=-10))
        self._activate(expired["id"])
        self.assertEqual(self._tier(), "FREE")


class SubscriptionApiTests(ApiClientMixin, unittest.TestCase):
    def setUp(self):
        self.start_client()
        self.user = self.auth_headers("s@example.com")
        self.admin = self.auth_headers("admin@example.com", role="ADMIN")

    def _subscribe(self, tier, cycle="monthly", amount=200):
        return self.client.post("/api/v1/subscriptions/", headers=self.user,
                                json={"tier": tier, "billing_cycle": cycle, "amount": amount})

    def _activate(self, subscription_id):
        resp = self.client.put(f"/api/v1/subscriptions/{subscription_id}", headers=self.admin,
                               json={"status": "ACTIVE"})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def _tier(self):
        return self.client.get("/api/v1/workouts/membership-info", headers=self.user).json()["current_tier"]

    def _statuses(self):
        mine = self.client.get("/api/v1/subscriptions/my-subscriptions", headers=self.user).json()
        return {s["id"]: s["status"] for s in mine}

    def test_same_tier_conflicts(self):
        self.assertEqual(self._subscribe("PREMIUM").status_code, 201)
        resp = self._subscribe("PREMIUM")
        self.assertEqual(resp.status_code, 409)

    def test_new_subscription_grants_nothing_until_activated(self):
        created = self._subscribe("VIP", amount=0.01)
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["status"], "PENDING")
        self.assertEqual(self._tier(), "FREE")
        self.assertEqual(self.client.put(f"/api/v1/subscriptions/{created.json()['id']}", headers=self.user,
                                         json={"status": "ACTIVE"}).status_code, 403)
        self._activate(created.json()["id"])
        self.assertEqual(self._tier(), "VIP")

    def test_tier_change_cancels_previous_on_activation(self):
        first = self._subscribe("BASIC").json()
        self._activate(first["id"])
        second = self._subscribe("VIP", cycle="yearly")
        self.assertEqual(second.status_code, 201)
        self.assertEqual(self._statuses()[first["id"]], "ACTIVE")
        self.assertEqual(self._tier(), "BASIC")

        self._activate(second.json()["id"])
        statuses = self._statuses()
        self.assertEqual(statuses[first["id"]], "CANCELLED")
        self.assertEqual(statuses[second.json()["id"]], "ACTIVE")
        self.assertEqual(self._tier(), "VIP")

    def test_new_request_replaces_pending_one(self):
        first = self._subscribe("BASIC").json()
        second = self._subscribe("PREMIUM").json()
        statuses = self._statuses()
        self.assertEqual(statuses[first["id"]], "CANCELLED")
        self.assertEqual(statuses[second["id"]], "PENDING")

    def test_amount_must_be_positive(self):
        self.assertEqual(self._subscribe("BASIC", amount=0).status_code, 400)

    def test_cancel_by_owner(self):
        sub = self._subscribe("BASIC").json()
        resp = self.client.patch(f"/api/v1/subscriptions/{sub['id']}/cancel", headers=self.user)
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "CANCELLED")
        self.assertTrue(body["cancel_at_period_end"])
        self.assertIsNotNone(body["canceled_at"])

    def test_period_end_per_cycle(self):
        start = datetime(2026, 1, 31, tzinfo=timezone.utc)
        self.assertEqual(period_end(start, "monthly"), datetime(2026, 2, 28, tzinfo=timezone.utc))
        self.assertEqual(period_end(start, "quarterly"), datetime(2026, 4, 30, tzinfo=timezone.utc))
        self.assertEqual(period_end(start, "yearly"), datetime(2027, 1, 31, tzinfo=timezone.utc))


class PaymentApiTests(ApiClientMixin, unittest.TestCase):
    def setUp(self):
        self.start_client()
        self.admin = self.auth_headers("admin@example.com", role="ADMIN")
        self.user = self.auth_headers("payer@example.com")

    def _pay(self, amount=99.5):
        return self.client.post("/api/v1/payments/", headers=self.user,
                                json={"amount": amount, "payment_method": "MOBILE_MONEY"})

    def test_invoice_number_format(self):
        self.assertRegex(generate_invoice_number(), r"^INV-\d{13}-[A-Z0-9]{9}$")
        created = self._pay()
        self.assertEqual(created.status_code, 201)
        body = created.json()
        self.assertEqual(body["status"], "PENDING")
        self.assertEqual(body["currency"], "LSL")
        self.assertTrue(re.match(r"^INV-\d+-[A-Z0-9]{9}$", body["invoice_number"]))

    def test_amount_must_be_positive(self):
        self.assertEqual(self._pay(amount=-5).status_code, 400)

    def test_refund_rules(self):
        pid = self._pay().json()["id"]
        pending = self.client.patch(f"/api/v1/payments/{pid}/refund", headers=self.admin)
        self.assertEqual(pending.status_code, 400)

        done = self.client.patch(f"/api/v1/payments/{pid}/status", headers=self.admin, json={"status": "COMPLETED"})
        self.assertEqual(done.status_code, 200)
        refunded = self.client.patch(f"/api/v1/payments/{pid}/refund", headers=self.admin)
        self.assertEqual(refunded.status_code, 200)
        self.assertEqual(refunded.json()["status"], "REFUNDED")
        self.assertIsNotNone(refunded.json()["refunded_at"])

        twice = self.client.patch(f"/api/v1/payments/{pid}/refund", headers=self.admin)
        self.assertEqual(twice.status_code, 400)

    def test_admin_listing_filters_by_status(self):
        self._pay()
        pid = self._pay().json()["id"]
        self.client.patch(f"/api/v1/payments/{pid}/status", headers=self.admin, json={"status": "FAILED"})
        failed = self.client.get("/api/v1/payments/", headers=self.admin, params={"status": "FAILED"}).json()
        self.assertEqual([p["id"] for p in failed], [pid])
        self.assertEqual(len(self.client.get("/api/v1/payments/", headers=self.admin).json()), 2)
        self.assertEqual(self.client.get("/api/v1/payments/", headers=self.user).status_code, 403)
        self.assertEqual(len(self.client.get("/api/v1/payments/my-payments", headers=self.user).json()), 2)


if __name__ == "__main__":
    unittest.main()
