import unittest

from fastapi.testclient import TestClient

from spa_backend.activity import InMemoryActivityStore, log_activity
from spa_backend.app import create_app
from spa_backend.dependencies import (
    get_activity_store,
    get_appointment_toggle,
    get_identity_provider,
    get_media_store,
)
from spa_backend.identity import StaticIdentityProvider
from spa_backend.media import InMemoryMediaStore
from spa_backend.toggle import AppointmentToggle


class BackendApiTests(unittest.TestCase):
    def setUp(self):
        self.app = create_app()
        self.media = InMemoryMediaStore()
        self.activities = InMemoryActivityStore()
        self.toggle = AppointmentToggle()
        self.identity = StaticIdentityProvider("u1")
        self.app.dependency_overrides = {
            get_media_store: lambda: self.media,
            get_activity_store: lambda: self.activities,
            get_appointment_toggle: lambda: self.toggle,
            get_identity_provider: lambda: self.identity,
        }
        self.client = TestClient(self.app)

    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy"})

    def test_appointment_toggle(self):
        self.assertEqual(self.client.get("/api/appointment").json(), {"enabled": False})
        self.assertEqual(self.client.post("/api/appointment").json(), {"enabled": True})
        self.assertEqual(self.client.get("/api/appointment").json(), {"enabled": True})

        response = self.client.delete("/api/appointment")
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.headers["allow"], "GET, POST")
        self.assertEqual(response.text, "Method DELETE Not Allowed")

    def test_appointment_rejects_head_and_options(self):
        response = self.client.options("/api/appointment")
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.headers["allow"], "GET, POST")
        self.assertEqual(response.text, "Method OPTIONS Not Allowed")

        response = self.client.head("/api/appointment")
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.headers["allow"], "GET, POST")

    def test_admin_profile(self):
        response = self.client.get("/api/admin/profile")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["id"], "u1")

        self.identity.uid = None
        response = self.client.get("/api/admin/profile")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Unauthorized"})

    def test_staff_photo_lifecycle(self):
        upload = self.client.post(
            "/api/media/staffs/upload", json={"file": "data:image/png;base64,AAAA"}
        )
        self.assertEqual(upload.status_code, 200)
        public_id = upload.json()["publicId"]

        listing = self.client.get("/api/media/staffs/list")
        self.assertEqual(listing.status_code, 200)
        self.assertEqual(
            [r["public_id"] for r in listing.json()["resources"]], [public_id]
        )

        missing = self.client.request("DELETE", "/api/media/staffs/delete", json={})
        self.assertEqual(missing.status_code, 400)
        self.assertEqual(missing.json(), {"error": "publicId required"})

        deleted = self.client.request(
            "DELETE", "/api/media/staffs/delete", json={"publicId": public_id}
        )
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json(), {"deleted": True})
        self.assertEqual(self.media.resources, {})

    def test_upload_raw_body(self):
        response = self.client.post(
            "/api/media/staffs/upload",
            content=b"data:image/gif;base64,R0lGODlhAQABAAAAACw=",
            headers={"Content-Type": "text/plain"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["publicId"].startswith("staffs/"))

    def test_media_wrong_method(self):
        response = self.client.post("/api/media/staffs/list")
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.content, b"")

        response = self.client.options("/api/media/staffs/list")
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.content, b"")

    def test_upload_json_string_body(self):
        response = self.client.post(
            "/api/media/staffs/upload",
            json="data:image/gif;base64,R0lGODlhAQABAAAAACw=",
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["publicId"].startswith("staffs/"))

    def test_create_folder_and_move(self):
        created = self.client.post(
            "/api/media/staffs/create-folder", json={"folderName": "team"}
        )
        self.assertEqual(created.status_code, 201)

        self.media.upload("data:x", folder="staffs", public_id="eve")
        moved = self.client.post(
            "/api/media/staffs/move",
            json={"publicId": "staffs/eve", "toFolder": "staffs/team"},
        )
        self.assertEqual(moved.json(), {"publicId": "staffs/team/eve"})

    def test_dashboard_activity_reads_logged_entries(self):
        self.assertTrue(
            log_activity("Gallery image uploaded", "gallery", store=self.activities)
        )

        response = self.client.get("/api/admin/dashboard/activity")

        self.assertEqual(response.status_code, 200)
        (entry,) = response.json()["activities"]
        self.assertEqual(entry["message"], "Gallery image uploaded")
        self.assertEqual(entry["type"], "gallery")
        self.assertEqual(entry["time"], "just now")


if __name__ == "__main__":
    unittest.main()
