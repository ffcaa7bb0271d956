import json
import unittest

from fastapi.testclient import TestClient

from backend.app import create_app
from backend.dependencies import get_storage_client
from backend.storage import InMemoryStorageClient


class BackendApiTests(unittest.TestCase):
    def setUp(self):
        self.storage = InMemoryStorageClient()
        app = create_app()
        app.dependency_overrides[get_storage_client] = lambda: self.storage
        self.client = TestClient(app)

    def test_create_fetch_and_update_user(self):
        response = self.client.post("/user", content='{"name":"test"}')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.headers["content-type"], "application/json")
        created = response.json()
        self.assertEqual(created["name"], "test")
        uuid = created["uuid"]
        self.assertIn(f"{uuid}.json", self.storage.stored_objects)

        fetched = self.client.get(f"/user/{uuid}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.text, response.text)

        updated = self.client.put(f"/user/{uuid}", content='{"name":"updated"}')
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json(), {"name": "updated", "uuid": uuid})

        refetched = self.client.get(f"/user/{uuid}")
        self.assertEqual(refetched.text, json.dumps(updated.json(), separators=(",", ":")))

    def test_create_user_without_body(self):
        response = self.client.post("/user")
        self.assertEqual(response.status_code, 201)
        self.assertEqual(list(response.json()), ["uuid"])

    def test_create_user_ignores_body_uuid(self):
        response = self.client.post("/user", json={"uuid": "chosen", "name": "x"})
        self.assertEqual(response.status_code, 201)
        self.assertNotEqual(response.json()["uuid"], "chosen")
        self.assertNotIn("chosen.json", self.storage.stored_objects)

    def test_fetch_unknown_user(self):
        response = self.client.get("/user/unknown")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "user not found"})

    def test_update_unknown_user(self):
        response = self.client.put("/user/unknown", json={"name": "x"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "user not found"})
        self.assertEqual(self.storage.stored_objects, {})

    def test_create_with_invalid_utf8_body(self):
        response = self.client.post("/user", content=b'{"a":"\xff"}')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.headers["content-type"], "application/json")
        self.assertEqual(response.json()["type"], "UnicodeDecodeError")
        self.assertEqual(self.storage.stored_objects, {})

    def test_update_with_invalid_utf8_body(self):
        self.storage.stored_objects["abc.json"] = b'{"uuid":"abc"}'
        response = self.client.put("/user/abc", content=b'{"a":"\xff"}')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["type"], "UnicodeDecodeError")
        self.assertEqual(self.storage.stored_objects["abc.json"], b'{"uuid":"abc"}')

    def test_update_with_malformed_body(self):
        self.storage.stored_objects["abc.json"] = b'{"uuid":"abc"}'
        response = self.client.put("/user/abc", content="{broken")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(self.storage.stored_objects["abc.json"], b'{"uuid":"abc"}')


if __name__ == "__main__":
    unittest.main()
