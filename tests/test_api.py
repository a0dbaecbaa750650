"""Endpoint tests through FastAPI's TestClient with a temporary data file."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient

from app.api.deps import require_role
from app.core.config import Settings, get_settings
from app.core.storage import JsonFileStore, get_store
from app.main import app


class ApiTestCase(unittest.TestCase):
    """Overrides the store and settings dependencies; the lifespan (default data file) is not run."""

    settings_overrides: dict = {}

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.store = JsonFileStore(Path(tmp.name) / "data.json", bcrypt_rounds=4)
        settings = Settings(JWT_SECRET="api-test-secret", BCRYPT_ROUNDS=4, **self.settings_overrides)
        app.dependency_overrides[get_store] = lambda: self.store
        app.dependency_overrides[get_settings] = lambda: settings
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    def _token(self, username: str, password: str) -> str:
        resp = self.client.post("/api/login", json={"username": username, "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["token"]

    def _create(self, **body: object):
        return self.client.post("/api/complaints", json=body)


class TestHealth(ApiTestCase):
    def test_health(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertIs(body["ok"], True)
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["storage"], "available")

    def test_root(self) -> None:
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("message", resp.json())


class TestLoginEndpoint(ApiTestCase):
    def test_login_returns_token_and_role(self) -> None:
        resp = self.client.post("/api/login", json={"username": "companyAdmin", "password": "1234"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertIs(body["ok"], True)
        self.assertTrue(body["token"])
        self.assertEqual(body["token_type"], "bearer")
        self.assertEqual(body["role"], "company")
        self.assertEqual(body["username"], "companyAdmin")
        self.assertEqual(body["user"]["id"], 2)
        self.assertNotIn("password_hash", body["user"])

    def test_station_login(self) -> None:
        resp = self.client.post("/api/login", json={"username": "stationUser", "password": "5678"})
        self.assertEqual(resp.json()["role"], "station")

    def test_missing_fields_is_400(self) -> None:
        for body in ({}, {"username": "companyAdmin"}, {"password": "1234"}, {"username": "", "password": "1234"}):
            with self.subTest(body=body):
                self.assertEqual(self.client.post("/api/login", json=body).status_code, 400)

    def test_bad_credentials_is_401(self) -> None:
        for username, password in (("companyAdmin", "0000"), ("ghost", "1234"), ("COMPANYADMIN", "1234")):
            with self.subTest(username=username):
                resp = self.client.post("/api/login", json={"username": username, "password": password})
                self.assertEqual(resp.status_code, 401)


class TestMeEndpoint(ApiTestCase):
    def test_me_with_token(self) -> None:
        token = self._token("stationUser", "5678")
        resp = self.client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertIs(body["ok"], True)
        self.assertEqual(body["user"]["username"], "stationUser")
        self.assertEqual(body["user"]["role"], "station")

    def test_me_without_token(self) -> None:
        resp = self.client.get("/api/me")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_me_with_malformed_token(self) -> None:
        resp = self.client.get("/api/me", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(resp.status_code, 401)


class TestComplaintEndpoints(ApiTestCase):
    def test_list_empty(self) -> None:
        resp = self.client.get("/api/complaints")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_create_and_list(self) -> None:
        resp = self._create(name="Station 7", email="ops@example.com", issue="Connector stuck")
        self.assertEqual(resp.status_code, 201)
        created = resp.json()
        self.assertEqual(created["status"], "Submitted")
        self.assertTrue(created["created_at"])
        self.assertIsNone(created["updated_at"])
        newer = self._create(name="Station 8", issue="No power").json()
        listed = self.client.get("/api/complaints").json()
        self.assertEqual([c["id"] for c in listed], [newer["id"], created["id"]])

    def test_create_missing_fields_is_400(self) -> None:
        for body in ({"name": "Station 7"}, {"issue": "x"}, {"name": "", "issue": "x"}):
            with self.subTest(body=body):
                self.assertEqual(self._create(**body).status_code, 400)
        self.assertEqual(self.client.get("/api/complaints").json(), [])

    def test_update_status(self) -> None:
        created = self._create(name="Station 7", issue="Connector stuck").json()
        resp = self.client.patch(f"/api/complaints/{created['id']}", json={"status": "Accepted"})
        self.assertEqual(resp.status_code, 200)
        updated = resp.json()
        self.assertEqual(updated["status"], "Accepted")
        self.assertIsNotNone(updated["updated_at"])
        self.assertEqual(updated["created_at"], created["created_at"])
        self.assertEqual(self.client.get("/api/complaints").json()[0]["status"], "Accepted")

    def test_update_without_body(self) -> None:
        created = self._create(name="Station 7", issue="Connector stuck").json()
        resp = self.client.patch(f"/api/complaints/{created['id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "Submitted")

    def test_update_unknown_id_is_404(self) -> None:
        resp = self.client.patch("/api/complaints/42", json={"status": "Accepted"})
        self.assertEqual(resp.status_code, 404)

    def test_update_unknown_id_with_unknown_status_is_404(self) -> None:
        resp = self.client.patch("/api/complaints/42", json={"status": "Closed"})
        self.assertEqual(resp.status_code, 404)

    def test_update_unknown_status_is_400(self) -> None:
        created = self._create(name="Station 7", issue="Connector stuck").json()
        resp = self.client.patch(f"/api/complaints/{created['id']}", json={"status": "Closed"})
        self.assertEqual(resp.status_code, 400)

    def test_delete_is_idempotent(self) -> None:
        created = self._create(name="Station 7", issue="Connector stuck").json()
        for _ in range(2):
            resp = self.client.delete(f"/api/complaints/{created['id']}")
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.json(), {"success": True})
        self.assertEqual(self.client.get("/api/complaints").json(), [])

    def test_storage_failure_is_500(self) -> None:
        with patch("app.core.storage.os.replace", side_effect=OSError("disk full")):
            resp = self._create(name="Station 7", issue="Connector stuck")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"detail": "Internal server error"})
        self.assertEqual(self.client.get("/api/complaints").json(), [])


class TestComplaintRoleEnforcement(ApiTestCase):
    """With COMPLAINTS_REQUIRE_AUTH, stations create and the company updates/deletes."""

    settings_overrides = {"COMPLAINTS_REQUIRE_AUTH": True}

    def setUp(self) -> None:
        super().setUp()
        self.station = {"Authorization": f"Bearer {self._token('stationUser', '5678')}"}
        self.company = {"Authorization": f"Bearer {self._token('companyAdmin', '1234')}"}

    def test_create_requires_station(self) -> None:
        body = {"name": "Station 7", "issue": "Connector stuck"}
        self.assertEqual(self.client.post("/api/complaints", json=body).status_code, 401)
        self.assertEqual(
            self.client.post("/api/complaints", json=body, headers=self.company).status_code, 403
        )
        self.assertEqual(
            self.client.post("/api/complaints", json=body, headers=self.station).status_code, 201
        )

    def test_update_and_delete_require_company(self) -> None:
        created = self.client.post(
            "/api/complaints",
            json={"name": "Station 7", "issue": "Connector stuck"},
            headers=self.station,
        ).json()
        url = f"/api/complaints/{created['id']}"
        self.assertEqual(
            self.client.patch(url, json={"status": "Declined"}, headers=self.station).status_code, 403
        )
        self.assertEqual(
            self.client.patch(url, json={"status": "Declined"}, headers=self.company).status_code, 200
        )
        self.assertEqual(self.client.delete(url).status_code, 401)
        self.assertEqual(self.client.delete(url, headers=self.company).status_code, 200)

    def test_list_stays_open(self) -> None:
        self.assertEqual(self.client.get("/api/complaints").status_code, 200)

    def test_unknown_role_is_rejected_when_building_dependency(self) -> None:
        with self.assertRaises(ValueError):
            require_role("admin")


if __name__ == "__main__":
    unittest.main()
