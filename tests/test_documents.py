from pathlib import Path

from voyagehub.services.document_storage import DocumentStorage

PDF_BYTES = b"%PDF-1.4 boarding pass"


def _upload(client, headers, vacation_id, **extra):
    data = {"vacationId": vacation_id, "title": "Passport", "type": "passport"}
    data.update(extra)
    return client.post(
        "/api/documents/upload",
        files={"file": ("passport.pdf", PDF_BYTES, "application/pdf")},
        data=data,
        headers=headers,
    )


def test_upload_list_and_serve(client, settings, auth_headers, vacation) -> None:
    res = _upload(client, auth_headers, vacation["id"], expirationDate="2027-01-31")
    assert res.status_code == 201, res.text
    document = res.json()
    assert document["fileName"] == "passport.pdf"
    assert document["fileSize"] == len(PDF_BYTES)
    assert document["mimeType"] == "application/pdf"
    assert document["expirationDate"] == "2027-01-31"
    assert document["fileUrl"].startswith("/uploads/documents/file-")
    assert document["fileUrl"].endswith(".pdf")

    listed = client.get(f"/api/documents?vacationId={vacation['id']}", headers=auth_headers)
    assert [d["id"] for d in listed.json()] == [document["id"]]

    filename = document["fileUrl"].rsplit("/", 1)[-1]
    assert (Path(settings.UPLOAD_DIR) / "documents" / filename).read_bytes() == PDF_BYTES

    served = client.get(f"/api/documents/file/{filename}", headers=auth_headers)
    assert served.status_code == 200
    assert served.content == PDF_BYTES


def test_upload_rejects_unsupported_type(client, settings, auth_headers, vacation) -> None:
    res = client.post(
        "/api/documents/upload",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        data={"vacationId": vacation["id"], "title": "Notes", "type": "other"},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert list((Path(settings.UPLOAD_DIR) / "documents").iterdir()) == []


def test_upload_rejects_oversized_file(client, settings, auth_headers, vacation) -> None:
    too_big = b"0" * (settings.MAX_UPLOAD_SIZE_BYTES + 1)
    res = client.post(
        "/api/documents/upload",
        files={"file": ("scan.png", too_big, "image/png")},
        data={"vacationId": vacation["id"], "title": "Scan", "type": "visa"},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert list((Path(settings.UPLOAD_DIR) / "documents").iterdir()) == []


def test_missing_file_is_not_found(client, auth_headers) -> None:
    assert client.get("/api/documents/file/file-1-2.pdf", headers=auth_headers).status_code == 404


def test_update_and_delete_document(client, settings, auth_headers, vacation) -> None:
    document = _upload(client, auth_headers, vacation["id"]).json()

    res = client.patch(
        f"/api/documents/{document['id']}",
        json={"title": "Old passport", "sharedWith": ["Bob@example.com"]},
        headers=auth_headers,
    )
    assert res.status_code == 200
    assert res.json()["title"] == "Old passport"
    assert res.json()["sharedWith"] == ["bob@example.com"]
    assert res.json()["type"] == "passport"

    stored = Path(settings.UPLOAD_DIR) / "documents" / document["fileUrl"].rsplit("/", 1)[-1]
    assert client.delete(f"/api/documents/{document['id']}", headers=auth_headers).status_code == 200
    assert not stored.exists()
    assert client.get(f"/api/documents?vacationId={vacation['id']}", headers=auth_headers).json() == []


def test_documents_of_other_users_are_hidden(client, register_user, auth_headers, vacation) -> None:
    document = _upload(client, auth_headers, vacation["id"]).json()
    filename = document["fileUrl"].rsplit("/", 1)[-1]
    eve_headers, _ = register_user(email="eve@example.com", first_name="Eve")

    assert client.get(f"/api/documents/file/{filename}", headers=eve_headers).status_code == 404
    assert client.delete(f"/api/documents/{document['id']}", headers=eve_headers).status_code == 404
    assert _upload(client, eve_headers, vacation["id"]).status_code == 404


def test_storage_refuses_paths_outside_its_directory(tmp_path) -> None:
    storage = DocumentStorage(str(tmp_path), 1024, ["application/pdf"])
    storage.ensure_directory()
    (tmp_path / "secret.txt").write_text("keep out")

    assert storage.resolve("../secret.txt") is None
    assert storage.resolve("..") is None
    assert storage.remove("../secret.txt") is False
    assert (tmp_path / "secret.txt").exists()


def test_document_title_cannot_be_cleared(client, auth_headers, vacation) -> None:
    document = _upload(client, auth_headers, vacation["id"]).json()

    for title in ("", "   "):
        res = client.patch(f"/api/documents/{document['id']}", json={"title": title}, headers=auth_headers)
        assert res.status_code == 400
        assert res.json()["errors"][0]["field"] == "title"
    assert client.get(f"/api/documents?vacationId={vacation['id']}", headers=auth_headers).json()[0]["title"] == "Passport"
