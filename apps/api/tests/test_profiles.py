"""Registration, admin bootstrap and profile API tests."""

from __future__ import annotations

import os
import unittest

from fastapi.testclient import TestClient

from app.core.cache import ResponseCache
from app.core.config import get_settings
from app.main import create_app
from app.schemas.auth import Role
from app.schemas.business import SubscriptionType
from app.schemas.creator import CreatorStatus


class _FakeMonotonic:
    def __init__(self) -> None:
        self.current = 1000.0

    def __call__(self) -> float:
        return self.current


_CREATOR_PAYLOAD = {
    "name": "Ana Kreator",
    "bio": "Short-form video creator.",
    "location": "Zagreb",
    "price_from": 150,
    "phone": "+385 91 000 0000",
    "categories": ["beauty"],
}


def _auth(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer test:{user_id}"}


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "UGCMARKET_AUTH_PROVIDER",
        "UGCMARKET_RATE_LIMIT_ENABLED",
        "UGCMARKET_ADMIN_SETUP_SECRET",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["UGCMARKET_AUTH_PROVIDER"] = "mock"
        os.environ["UGCMARKET_RATE_LIMIT_ENABLED"] = "false"
        os.environ["UGCMARKET_ADMIN_SETUP_SECRET"] = "setup-secret"
        get_settings.cache_clear()
        self.app = create_app()
        self.client = TestClient(self.app)
        self.store = self.app.state.store

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()

    def _register_creator(self, user_id: str) -> str:
        response = self.client.post("/api/v1/auth/register/creator", headers=_auth(user_id), json=_CREATOR_PAYLOAD)
        self.assertEqual(response.status_code, 201)
        return response.json()["creator_id"]

    def _register_business(self, user_id: str, plan: str = "monthly") -> str:
        response = self.client.post(
            "/api/v1/auth/register/business",
            headers=_auth(user_id),
            json={"company_name": "Acme d.o.o.", "plan": plan, "website": "https://acme.example"},
        )
        self.assertEqual(response.status_code, 201)
        return response.json()["business_id"]

    def _create_admin(self, user_id: str = "admin-1") -> None:
        self.store.create_user(user_id=user_id, email=f"{user_id}@example.test", role=Role.ADMIN)


class RegistrationApiTests(_SettingsEnvCase):
    def test_register_creator_creates_user_and_pending_profile(self) -> None:
        response = self.client.post(
            "/api/v1/auth/register/creator",
            headers={"Authorization": "Bearer test:creator-1:ana@example.test"},
            json=_CREATOR_PAYLOAD,
        )

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["user_id"], "creator-1")
        self.assertEqual(body["role"], "creator")
        self.assertIsNone(body["business_id"])

        user = self.store.get_user("creator-1")
        self.assertIs(user.role, Role.CREATOR)
        creator = self.store.get_creator(body["creator_id"])
        self.assertIs(creator.status, CreatorStatus.PENDING)
        self.assertEqual(creator.email, "ana@example.test")
        self.assertEqual(creator.categories, ["beauty"])

    def test_register_business_sets_subscription_term(self) -> None:
        business_id = self._register_business("business-1", plan="yearly")

        business = self.store.get_business(business_id)
        self.assertIs(business.subscription_type, SubscriptionType.YEARLY)
        self.assertEqual(business.subscription_status, "active")
        self.assertEqual((business.expires_at - business.subscribed_at).days, 365)
        self.assertEqual(business.website, "https://acme.example/")

    def test_second_registration_returns_409(self) -> None:
        self._register_creator("user-1")
        writes_before = self.store.profile_write_count

        response = self.client.post(
            "/api/v1/auth/register/business",
            headers=_auth("user-1"),
            json={"company_name": "Acme d.o.o."},
        )

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["code"], "ALREADY_EXISTS")
        self.assertEqual(response.json()["details"], {"role": "creator"})
        self.assertEqual(self.store.profile_write_count, writes_before)

    def test_registration_requires_session(self) -> None:
        response = self.client.post("/api/v1/auth/register/creator", json=_CREATOR_PAYLOAD)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.store.profile_write_count, 0)

    def test_invalid_payload_returns_400_validation_error(self) -> None:
        response = self.client.post(
            "/api/v1/auth/register/creator",
            headers=_auth("user-1"),
            json={**_CREATOR_PAYLOAD, "bio": "short"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "VALIDATION_ERROR")
        self.assertIn("bio", response.json()["message"])
        self.assertIsNone(self.store.get_user("user-1"))


class AdminSetupApiTests(_SettingsEnvCase):
    def test_valid_secret_registers_admin(self) -> None:
        response = self.client.post(
            "/api/v1/admin/setup",
            headers={**_auth("admin-1"), "X-Admin-Setup-Secret": "setup-secret"},
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["role"], "admin")
        self.assertIs(self.store.get_user("admin-1").role, Role.ADMIN)

    def test_wrong_secret_is_forbidden(self) -> None:
        response = self.client.post(
            "/api/v1/admin/setup",
            headers={**_auth("admin-1"), "X-Admin-Setup-Secret": "guess"},
        )

        self.assertEqual(response.status_code, 403)
        self.assertIsNone(self.store.get_user("admin-1"))

    def test_setup_disabled_without_configured_secret(self) -> None:
        os.environ.pop("UGCMARKET_ADMIN_SETUP_SECRET", None)
        get_settings.cache_clear()

        response = self.client.post(
            "/api/v1/admin/setup",
            headers={**_auth("admin-1"), "X-Admin-Setup-Secret": "setup-secret"},
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["code"], "FORBIDDEN")

    def test_existing_profile_cannot_become_admin(self) -> None:
        self._register_creator("user-1")

        response = self.client.post(
            "/api/v1/admin/setup",
            headers={**_auth("user-1"), "X-Admin-Setup-Secret": "setup-secret"},
        )

        self.assertEqual(response.status_code, 409)
        self.assertIs(self.store.get_user("user-1").role, Role.CREATOR)


class CreatorApiTests(_SettingsEnvCase):
    def test_public_list_contains_only_approved_creators_without_contact(self) -> None:
        approved_id = self._register_creator("creator-1")
        self._register_creator("creator-2")
        self.store.update_creator(self.store.get_creator(approved_id), {"status": CreatorStatus.APPROVED})

        response = self.client.get("/api/v1/creators")

        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["id"] for item in response.json()], [approved_id])
        self.assertIsNone(response.json()[0]["email"])
        self.assertIsNone(response.json()[0]["phone"])

    def test_contact_info_visibility(self) -> None:
        creator_id = self._register_creator("creator-1")
        self._register_creator("creator-2")
        self._register_business("business-1")
        self._create_admin()

        anonymous = self.client.get(f"/api/v1/creators/{creator_id}").json()
        other_creator = self.client.get(f"/api/v1/creators/{creator_id}", headers=_auth("creator-2")).json()
        unregistered = self.client.get(f"/api/v1/creators/{creator_id}", headers=_auth("nobody")).json()
        owner = self.client.get(f"/api/v1/creators/{creator_id}", headers=_auth("creator-1")).json()
        business = self.client.get(f"/api/v1/creators/{creator_id}", headers=_auth("business-1")).json()
        admin = self.client.get(f"/api/v1/creators/{creator_id}", headers=_auth("admin-1")).json()

        for hidden in (anonymous, other_creator, unregistered):
            self.assertNotIn("email", hidden)
            self.assertNotIn("phone", hidden)
        for visible in (owner, business, admin):
            self.assertEqual(visible["email"], "creator-1@example.test")
            self.assertEqual(visible["phone"], "+385 91 000 0000")

    def test_unknown_creator_returns_404(self) -> None:
        response = self.client.get("/api/v1/creators/missing")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["code"], "RESOURCE_NOT_FOUND")

    def test_owner_updates_profile_but_not_status(self) -> None:
        creator_id = self._register_creator("creator-1")

        updated = self.client.put(
            f"/api/v1/creators/{creator_id}",
            headers=_auth("creator-1"),
            json={"bio": "Now also doing podcasts.", "price_from": 200},
        )
        status_change = self.client.put(
            f"/api/v1/creators/{creator_id}",
            headers=_auth("creator-1"),
            json={"status": "approved"},
        )

        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["price_from"], 200)
        self.assertEqual(status_change.status_code, 403)
        self.assertIs(self.store.get_creator(creator_id).status, CreatorStatus.PENDING)

    def test_null_for_required_fields_returns_400_and_keeps_profile(self) -> None:
        creator_id = self._register_creator("creator-1")

        for field_name in ("name", "bio", "categories", "price_from"):
            response = self.client.put(
                f"/api/v1/creators/{creator_id}",
                headers=_auth("creator-1"),
                json={field_name: None},
            )
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json()["code"], "VALIDATION_ERROR")

        creator = self.store.get_creator(creator_id)
        self.assertEqual(creator.name, "Ana Kreator")
        self.assertEqual(creator.categories, ["beauty"])
        self.assertEqual(self.client.get(f"/api/v1/creators/{creator_id}").status_code, 200)

    def test_owner_clears_optional_contact_with_null(self) -> None:
        creator_id = self._register_creator("creator-1")

        response = self.client.put(
            f"/api/v1/creators/{creator_id}",
            headers=_auth("creator-1"),
            json={"phone": None},
        )

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(self.store.get_creator(creator_id).phone)

    def test_other_creator_cannot_update_profile(self) -> None:
        creator_id = self._register_creator("creator-1")
        self._register_creator("creator-2")

        response = self.client.put(
            f"/api/v1/creators/{creator_id}",
            headers=_auth("creator-2"),
            json={"bio": "Hijacked biography text."},
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["code"], "FORBIDDEN")

    def test_admin_approval_invalidates_public_list_cache(self) -> None:
        creator_id = self._register_creator("creator-1")
        self._create_admin()
        self.assertEqual(self.client.get("/api/v1/creators").json(), [])

        response = self.client.put(
            f"/api/v1/creators/{creator_id}",
            headers=_auth("admin-1"),
            json={"status": "approved"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["id"] for item in self.client.get("/api/v1/creators").json()], [creator_id])


class BusinessApiTests(_SettingsEnvCase):
    def test_public_profile(self) -> None:
        business_id = self._register_business("business-1")

        response = self.client.get(f"/api/v1/businesses/{business_id}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["company_name"], "Acme d.o.o.")
        self.assertEqual(response.json()["subscription_type"], "monthly")

    def test_only_owner_updates_business(self) -> None:
        business_id = self._register_business("business-1")
        self._register_business("business-2")
        self._create_admin()

        owner = self.client.put(
            f"/api/v1/businesses/{business_id}",
            headers=_auth("business-1"),
            json={"industry": "Retail"},
        )
        other = self.client.put(
            f"/api/v1/businesses/{business_id}",
            headers=_auth("business-2"),
            json={"industry": "Hijacked"},
        )
        admin = self.client.put(
            f"/api/v1/businesses/{business_id}",
            headers=_auth("admin-1"),
            json={"industry": "Admin edit"},
        )

        self.assertEqual(owner.status_code, 200)
        self.assertEqual(other.status_code, 403)
        self.assertEqual(admin.status_code, 403)
        self.assertEqual(self.store.get_business(business_id).industry, "Retail")

    def test_null_company_name_returns_400_and_keeps_profile(self) -> None:
        business_id = self._register_business("business-1")

        response = self.client.put(
            f"/api/v1/businesses/{business_id}",
            headers=_auth("business-1"),
            json={"company_name": None},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "VALIDATION_ERROR")
        self.assertEqual(self.store.get_business(business_id).company_name, "Acme d.o.o.")

    def test_unknown_business_returns_404(self) -> None:
        self._register_business("business-1")

        response = self.client.put(
            "/api/v1/businesses/missing",
            headers=_auth("business-1"),
            json={"industry": "Retail"},
        )

        self.assertEqual(response.status_code, 404)


class ResponseCacheTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _FakeMonotonic()
        self.cache = ResponseCache(default_ttl=120.0, clock=self.clock)

    def test_entries_expire_after_ttl(self) -> None:
        self.cache.set("creators:list", ["a"])
        self.cache.set("short", "value", ttl=5)

        self.clock.current += 6
        self.assertIsNone(self.cache.get("short"))
        self.assertEqual(self.cache.get("creators:list"), ["a"])

        self.clock.current += 120
        self.assertIsNone(self.cache.get("creators:list"))
        self.assertEqual(len(self.cache), 0)

    def test_clear_prefix_only_drops_matching_keys(self) -> None:
        self.cache.set("reviews:creator:1:all", [])
        self.cache.set("reviews:creator:1:approved", [])
        self.cache.set("reviews:creator:2:all", [])

        self.cache.clear_prefix("reviews:creator:1:")

        self.assertIsNone(self.cache.get("reviews:creator:1:all"))
        self.assertEqual(self.cache.get("reviews:creator:2:all"), [])

    def test_clear_and_clear_all(self) -> None:
        self.cache.set("a", 1)
        self.cache.set("b", 2)

        self.cache.clear("a")
        self.assertIsNone(self.cache.get("a"))
        self.cache.clear_all()
        self.assertEqual(len(self.cache), 0)


if __name__ == "__main__":
    unittest.main()
