from fastapi.testclient import TestClient

from fitness_api.core.config import Settings
from fitness_api.main import create_app

PASSWORD = "correct-horse-9"


def make_settings(**overrides) -> Settings:
    values = dict(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-access-secret",
        REFRESH_SECRET_KEY="test-refresh-secret",
        PASSWORD_HASH_TIME_COST=1,
        PASSWORD_HASH_MEMORY_COST=1024,
        DB_BOOTSTRAP="create_all",
        SEED_PLANS=False,
        ENABLE_METRICS=False,
        LOG_LEVEL="WARNING",
    )
    values.update(overrides)
    return Settings(**values)


class ApiClientMixin:
    """Fresh app + in-memory database per test."""

    settings_overrides = {}

    def start_client(self):
        self.app = create_app(make_settings(**self.settings_overrides))
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def register(self, email, role=None, password=PASSWORD):
        body = {"email": email, "password": password, "first_name": "Test", "last_name": "User"}
        if role:
            body["role"] = role
        resp = self.client.post("/api/v1/auth/register", json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def auth_headers(self, email, role=None):
        data = self.register(email, role=role)
        return {"Authorization": f"Bearer {data['access_token']}"}
