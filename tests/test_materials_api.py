from pramuka.models import Material


def _create(client, headers, **payload):
    body = {"title": "Tali Temali", "description": "Simpul dasar", "content": "Simpul pangkal dan simpul mati."}
    body.update(payload)
    return client.post("/api/materi", headers=headers, json=body)


class TestMaterials:
    def test_materi_team_creates_text_material(self, client, make_profile, auth_headers, db):
        make_profile("materi-1", role="materi", full_name="Kak Rudi")

        response = _create(client, auth_headers("materi-1"), title="  Tali Temali ")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["title"] == "Tali Temali"
        assert data["uploaded_by"] == "Kak Rudi"
        assert data["file_url"] is None
        assert data["file_path"] is None

        material = db.query(Material).one()
        assert material.uploaded_by == "materi-1"
        assert material.file_name is None

    def test_anggota_cannot_create(self, client, make_profile, auth_headers):
        make_profile("user-1")

        response = _create(client, auth_headers("user-1"))

        assert response.status_code == 403
        assert response.json() == {"error": "Hanya tim materi atau admin yang dapat mengunggah."}

    def test_title_and_content_required(self, client, make_profile, auth_headers):
        make_profile("admin-1", role="admin")
        headers = auth_headers("admin-1")

        no_title = _create(client, headers, title=" ")
        no_content = _create(client, headers, content=None)

        assert no_title.status_code == 400
        assert no_title.json() == {"error": "Judul wajib diisi."}
        assert no_content.status_code == 400
        assert no_content.json() == {"error": "Konten materi wajib diisi."}

    def test_list_newest_first(self, client, make_profile, auth_headers):
        make_profile("materi-1", role="materi")
        headers = auth_headers("materi-1")
        _create(client, headers, title="Pertama")
        _create(client, headers, title="Kedua")

        response = client.get("/api/materi", headers=headers)

        assert response.status_code == 200
        assert [item["title"] for item in response.json()["data"]] == ["Kedua", "Pertama"]

    def test_list_requires_login(self, client):
        assert client.get("/api/materi").status_code == 401

    def test_edit_keeps_attachment(self, client, make_profile, auth_headers, db):
        make_profile("materi-1", role="materi")
        headers = auth_headers("materi-1")
        material_id = _create(client, headers).json()["data"]["id"]
        material = db.query(Material).one()
        material.file_name = "simpul.pdf"
        db.commit()

        response = client.put(f"/api/materi/{material_id}", headers=headers, json={
            "title": "Tali Temali Lanjutan", "content": "Simpul jangkar.",
        })

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Tali Temali Lanjutan"
        assert data["description"] is None
        assert data["file_name"] == "simpul.pdf"

    def test_edit_unknown_material(self, client, make_profile, auth_headers):
        make_profile("admin-1", role="admin")

        response = client.put("/api/materi/999", headers=auth_headers("admin-1"), json={
            "title": "Sandi", "content": "Sandi rumput.",
        })

        assert response.status_code == 404
        assert response.json() == {"error": "Materi tidak ditemukan."}

    def test_bph_deletes_material(self, client, make_profile, auth_headers, db):
        make_profile("materi-1", role="materi")
        make_profile("bph-1", role="bph")
        material_id = _create(client, auth_headers("materi-1")).json()["data"]["id"]

        response = client.delete(f"/api/materi/{material_id}", headers=auth_headers("bph-1"))

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert db.query(Material).count() == 0

    def test_bph_cannot_edit(self, client, make_profile, auth_headers):
        make_profile("materi-1", role="materi")
        make_profile("bph-1", role="bph")
        material_id = _create(client, auth_headers("materi-1")).json()["data"]["id"]

        response = client.put(f"/api/materi/{material_id}", headers=auth_headers("bph-1"), json={
            "title": "Sandi", "content": "Sandi rumput.",
        })

        assert response.status_code == 403

    def test_delete_forbidden_for_anggota(self, client, make_profile, auth_headers):
        make_profile("user-1")

        response = client.delete("/api/materi/1", headers=auth_headers("user-1"))

        assert response.status_code == 403
        assert response.json() == {"error": "Tidak memiliki akses untuk menghapus."}

    def test_delete_unknown_material(self, client, make_profile, auth_headers):
        make_profile("admin-1", role="admin")

        assert client.delete("/api/materi/999", headers=auth_headers("admin-1")).status_code == 404
