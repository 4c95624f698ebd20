"""Tests for employee CRUD with multipart uploads."""

import io

from PIL import Image
from sqlalchemy import text


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 3), color="red").save(buf, format="PNG")
    return buf.getvalue()


class TestCreateEmployee:

    def test_create_minimal(self, client):
        resp = client.post("/api/employees", data={"name": "Sara", "email": "Sara@Example.com"})
        assert resp.status_code == 201
        body = resp.json()
        assert body["email"] == "sara@example.com"
        assert body["status"] == "active"
        assert body["folders"] == []
        assert body["version"] == 1

    def test_create_with_uploads_files_documents_folder(self, client, storage):
        resp = client.post(
            "/api/employees",
            data={"name": "Sara", "email": "sara@example.com", "hireDate": "2024-03-01"},
            files=[
                ("profileImage", ("me.png", _png_bytes(), "image/png")),
                ("documents", ("cv.pdf", b"%PDF-1.4 cv", "application/pdf")),
                ("documents", ("id.pdf", b"%PDF-1.4 id", "application/pdf")),
            ],
        )
        assert resp.status_code == 201, resp.text
        body = resp.json()
        assert body["hireDate"] == "2024-03-01"
        assert body["profileImage"].startswith("http://storage.test/employees/profile-images/")
        assert [f["name"] for f in body["folders"]] == ["Documents"]
        assert [d["name"] for d in body["folders"][0]["documents"]] == ["cv.pdf", "id.pdf"]
        assert body["folders"][0]["parentId"] is None
        assert len(storage.uploads) == 3

    def test_too_many_documents_rejected(self, client, storage):
        files = [("documents", (f"d{i}.pdf", b"%PDF", "application/pdf")) for i in range(6)]
        resp = client.post(
            "/api/employees", data={"name": "Sara", "email": "sara@example.com"}, files=files
        )
        assert resp.status_code == 400
        assert storage.uploads == []

    def test_profile_image_must_be_an_image(self, client):
        resp = client.post(
            "/api/employees",
            data={"name": "Sara", "email": "sara@example.com"},
            files={"profileImage": ("me.pdf", b"%PDF", "application/pdf")},
        )
        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "profileImage"

    def test_failed_upload_removes_earlier_uploads(self, client, storage):
        storage.fail_after = 1

        resp = client.post(
            "/api/employees",
            data={"name": "Sara", "email": "sara@example.com"},
            files=[
                ("profileImage", ("me.png", _png_bytes(), "image/png")),
                ("documents", ("cv.pdf", b"%PDF-1.4 cv", "application/pdf")),
            ],
        )

        assert resp.status_code == 502
        assert storage.destroyed == [storage.uploads[0]["public_id"]]
        assert client.get("/api/employees").json() == []

    def test_duplicate_email_rejected(self, client, employee):
        resp = client.post("/api/employees", data={"name": "Other", "email": employee["email"]})
        assert resp.status_code == 400
        assert resp.json()["error"] == "DUPLICATE_RECORD"

    def test_invalid_email_rejected(self, client):
        resp = client.post("/api/employees", data={"name": "Sara", "email": "not-an-email"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "VALIDATION_ERROR"


class TestReadEmployees:

    def test_get_populates_cache(self, client, employee, fake_redis):
        resp = client.get(f"/api/employees/{employee['id']}")
        assert resp.status_code == 200
        assert fake_redis.expiries[f"employees:{employee['id']}"] == 300

    def test_get_serves_from_cache(self, client, employee, fake_redis, db):
        client.get(f"/api/employees/{employee['id']}")
        # Bypass the service so only the cache knows the old name.
        db.execute(
            text("UPDATE employees SET name = 'Changed' WHERE id = :id"),
            {"id": employee["id"]},
        )
        db.commit()
        assert client.get(f"/api/employees/{employee['id']}").json()["name"] == employee["name"]

    def test_list(self, client, employee):
        client.post("/api/employees", data={"name": "Bilal", "email": "bilal@example.com"})
        resp = client.get("/api/employees")
        assert resp.status_code == 200
        assert [e["name"] for e in resp.json()] == ["Amina Diallo", "Bilal"]

    def test_unknown_employee_returns_404(self, client):
        resp = client.get("/api/employees/missing")
        assert resp.status_code == 404
        assert resp.json() == {
            "error": "EMPLOYEE_NOT_FOUND",
            "message": "Employee not found: missing",
            "details": {"employee_id": "missing"},
        }


class TestUpdateAndDelete:

    def test_update_fields_busts_cache(self, client, employee, fake_redis):
        client.get(f"/api/employees/{employee['id']}")

        resp = client.put(f"/api/employees/{employee['id']}", data={"position": "Supervisor"})

        assert resp.status_code == 200
        assert resp.json()["position"] == "Supervisor"
        assert resp.json()["name"] == employee["name"]
        assert resp.json()["version"] == employee["version"] + 1
        assert f"employees:{employee['id']}" not in fake_redis.store

    def test_new_profile_image_replaces_old(self, client, storage):
        created = client.post(
            "/api/employees",
            data={"name": "Sara", "email": "sara@example.com"},
            files={"profileImage": ("a.png", _png_bytes(), "image/png")},
        ).json()

        resp = client.put(
            f"/api/employees/{created['id']}",
            files={"profileImage": ("b.png", _png_bytes(), "image/png")},
        )

        assert resp.status_code == 200
        assert storage.destroyed == [created["profileImagePublicId"]]
        assert resp.json()["profileImagePublicId"] != created["profileImagePublicId"]

    def test_documents_appended_to_existing_folder(self, client, employee):
        url = f"/api/employees/{employee['id']}"
        client.put(url, files={"documents": ("a.pdf", b"%PDF a", "application/pdf")})
        resp = client.put(url, files={"documents": ("b.pdf", b"%PDF b", "application/pdf")})

        folders = resp.json()["folders"]
        assert len(folders) == 1
        assert [d["name"] for d in folders[0]["documents"]] == ["a.pdf", "b.pdf"]

    def test_failed_upload_leaves_employee_unchanged(self, client, employee, storage):
        storage.fail_after = 1
        url = f"/api/employees/{employee['id']}"

        resp = client.put(
            url,
            data={"position": "Supervisor"},
            files=[
                ("profileImage", ("me.png", _png_bytes(), "image/png")),
                ("documents", ("cv.pdf", b"%PDF-1.4 cv", "application/pdf")),
            ],
        )

        assert resp.status_code == 502
        assert storage.destroyed == [storage.uploads[0]["public_id"]]
        current = client.get(url).json()
        assert current["position"] == employee["position"]
        assert current["profileImage"] is None
        assert current["folders"] == []
        assert current["version"] == employee["version"]

    def test_blank_name_rejected(self, client, employee):
        resp = client.put(f"/api/employees/{employee['id']}", data={"name": "   "})
        assert resp.status_code == 400
        assert client.get(f"/api/employees/{employee['id']}").json()["name"] == employee["name"]

    def test_name_is_trimmed(self, client, employee):
        resp = client.put(f"/api/employees/{employee['id']}", data={"name": "  Amina D.  "})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Amina D."

    def test_invalid_status_rejected(self, client, employee):
        resp = client.put(f"/api/employees/{employee['id']}", data={"status": "retired"})
        assert resp.status_code == 400

    def test_delete(self, client, employee, fake_redis):
        client.get("/api/employees")
        resp = client.delete(f"/api/employees/{employee['id']}")
        assert resp.json() == {"success": True}
        assert "employees:all" not in fake_redis.store
        assert client.get(f"/api/employees/{employee['id']}").status_code == 404
