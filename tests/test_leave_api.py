from datetime import date

from pramuka.config import settings
from pramuka.models import LeaveRequest
from tests.conftest import jakarta

ADMIN = {"x-action-token": "rahasia-admin"}


class TestLeaveRequests:
    def test_list_active_newest_first(self, client, make_izin):
        make_izin(nama="Andi", created_at=jakarta(2024, 5, 1, 8))
        make_izin(nama="Rina", created_at=jakarta(2024, 5, 2, 8))
        make_izin(nama="Lama", archive_date=date(2024, 4, 26))

        response = client.get("/api/izin")

        assert response.status_code == 200
        assert [item["nama"] for item in response.json()] == ["Rina", "Andi"]

    def test_submit_creates_pending_request(self, client, db):
        response = client.post("/api/izin", json={
            "nama": "  Budi  ", "absen": 12, "kelas": "X5", "alasan": "Sakit demam",
        })

        assert response.status_code == 201
        body = response.json()
        assert body["nama"] == "Budi"
        assert body["status"] == "pending"
        assert body["is_archived"] is False
        assert body["archive_date"] is None
        assert db.query(LeaveRequest).count() == 1

    def test_submit_rejects_unknown_class(self, client):
        response = client.post("/api/izin", json={
            "nama": "Budi", "absen": 12, "kelas": "XI", "alasan": "Sakit",
        })

        assert response.status_code == 400
        assert response.json()["error"] == "Data tidak valid."
        assert "body.kelas" in response.json()["fields"]

    def test_submit_rejects_out_of_range_absen(self, client):
        response = client.post("/api/izin", json={
            "nama": "Budi", "absen": 0, "kelas": "X1", "alasan": "Sakit",
        })

        assert response.status_code == 400


class TestAdminActions:
    def test_approve_requires_token(self, client, make_izin):
        record = make_izin()

        missing = client.patch(f"/api/izin/{record.id}")
        wrong = client.patch(f"/api/izin/{record.id}", headers={"x-action-token": "salah"})

        assert missing.status_code == 401
        assert wrong.status_code == 401
        assert wrong.json() == {"error": "Token tidak valid."}

    def test_approve(self, client, make_izin):
        record = make_izin()

        response = client.patch(f"/api/izin/{record.id}", headers=ADMIN)

        assert response.status_code == 200
        assert response.json()["status"] == "approved"

    def test_approve_unknown_request(self, client):
        response = client.patch("/api/izin/999", headers=ADMIN)

        assert response.status_code == 404
        assert response.json() == {"error": "Izin tidak ditemukan"}

    def test_delete(self, client, make_izin, db):
        record = make_izin()

        response = client.delete(f"/api/izin/{record.id}", headers=ADMIN)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert db.query(LeaveRequest).count() == 0

    def test_delete_unknown_request(self, client):
        assert client.delete("/api/izin/999", headers=ADMIN).status_code == 404

    def test_unconfigured_token_is_server_error(self, client, make_izin, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_ACTION_TOKEN", "")
        record = make_izin()

        response = client.patch(f"/api/izin/{record.id}", headers=ADMIN)

        assert response.status_code == 500


class TestTokenVerify:
    def test_valid_token(self, client):
        response = client.post("/api/token/verify", json={"token": " rahasia-admin "})

        assert response.status_code == 200
        assert response.json() == {"valid": True}

    def test_missing_token(self, client):
        response = client.post("/api/token/verify", json={"token": "   "})

        assert response.status_code == 400
        assert response.json() == {"error": "Token diperlukan."}

    def test_wrong_token(self, client):
        response = client.post("/api/token/verify", json={"token": "bukan-token"})

        assert response.status_code == 401

    def test_non_ascii_token_is_rejected(self, client):
        response = client.post("/api/token/verify", json={"token": "rahasia-ädmin"})

        assert response.status_code == 401

    def test_unconfigured(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_ACTION_TOKEN", "")

        response = client.post("/api/token/verify", json={"token": "rahasia-admin"})

        assert response.status_code == 500


def test_health(client):
    assert client.get("/health").status_code == 200
