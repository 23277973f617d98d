from supabase import PostgrestAPIError, StorageException

from app.modules.reports.storage import image_object_name

FORM = {
    "name": "Juan Dela Cruz",
    "contact_number": "09171234567",
    "age": "34",
    "report_type": "crime",
    "description": "Snatching near the plaza",
    "date": "2024-05-01",
    "location": "Town plaza",
}


def seed_reports(fake):
    fake.tables["reports"] = [
        {"id": 1, "name": "A", "report_type": "crime", "description": "x", "image_path": None},
        {"id": 2, "name": "B", "report_type": "accident", "description": "y", "image_path": None},
        {"id": 3, "name": "C", "report_type": "flood", "description": "z", "image_path": None},
        {"id": 4, "name": "D", "report_type": "crime", "description": "w", "image_path": "images/1-a.png"},
    ]


def ids(resp):
    assert resp.status_code == 200
    return {row["id"] for row in resp.json()}


def test_list_all_reports(client, fake_supabase):
    seed_reports(fake_supabase)
    assert ids(client.get("/api/reports")) == {1, 2, 3, 4}


def test_typed_listings_partition_all_reports(client, fake_supabase):
    seed_reports(fake_supabase)
    everything = ids(client.get("/api/reports"))
    crime = ids(client.get("/api/reports/crime"))
    accident = ids(client.get("/api/reports/accident"))
    other = {row["id"] for row in client.get("/api/reports").json() if row["report_type"] not in ("crime", "accident")}

    assert crime == {1, 4}
    assert accident == {2}
    assert not crime & accident
    assert crime | accident | other == everything


def test_listing_provider_error(client, fake_supabase):
    fake_supabase.failures[("reports", "select")] = PostgrestAPIError({"message": "relation does not exist", "code": "42P01"})
    resp = client.get("/api/reports/crime")
    assert resp.status_code == 400
    assert resp.json() == {"error": "relation does not exist"}


def test_submit_without_image(client, fake_supabase):
    resp = client.post("/api/report", data=FORM)

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Report submitted successfully"
    assert body["data"][0]["image_path"] is None
    row = fake_supabase.rows("reports")[0]
    assert row["age"] == 34
    assert row["report_type"] == "crime"
    assert row["image_path"] is None
    assert fake_supabase.objects == {}


def test_submit_with_image(client, fake_supabase, upload_dir):
    resp = client.post(
        "/api/report",
        data=FORM,
        files={"image": ("photo.png", b"\x89PNG fake", "image/png")},
    )

    assert resp.status_code == 200
    image_path = fake_supabase.rows("reports")[0]["image_path"]
    assert image_path.startswith("images/")
    assert image_path.endswith("-photo.png")
    stored = fake_supabase.objects[("report_images", image_path)]
    assert stored["content"] == b"\x89PNG fake"
    assert stored["options"] == {"content-type": "image/png"}
    assert list(upload_dir.iterdir()) == []


def test_submit_optional_fields_blank(client, fake_supabase):
    form = {"name": "A", "report_type": " Accident ", "description": "Fender bender", "age": "", "location": ""}
    resp = client.post("/api/report", data=form)

    assert resp.status_code == 200
    row = fake_supabase.rows("reports")[0]
    assert row["report_type"] == "accident"
    assert row["age"] is None
    assert row["location"] is None


def test_submit_missing_required_field(client, fake_supabase):
    form = dict(FORM)
    del form["name"]
    resp = client.post("/api/report", data=form)
    assert resp.status_code == 400
    assert "name" in resp.json()["error"]
    assert fake_supabase.rows("reports") == []


def test_submit_blank_required_field(client, fake_supabase):
    resp = client.post("/api/report", data=dict(FORM, description="   "))
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields: description"}


def test_submit_non_numeric_age(client):
    resp = client.post("/api/report", data=dict(FORM, age="thirty"))
    assert resp.status_code == 400


def test_submit_superscript_age_is_rejected(client, fake_supabase):
    resp = client.post("/api/report", data=dict(FORM, age="\u00b2"))
    assert resp.status_code == 400
    assert resp.json() == {"error": "age must be a whole number"}
    assert fake_supabase.rows("reports") == []


def test_submit_rejects_non_image_attachment(client, fake_supabase):
    resp = client.post("/api/report", data=FORM, files={"image": ("notes.txt", b"hello", "text/plain")})
    assert resp.status_code == 400
    assert fake_supabase.objects == {}
    assert fake_supabase.rows("reports") == []


def test_upload_failure_aborts_submission(client, fake_supabase, upload_dir):
    fake_supabase.storage_failure = StorageException({"statusCode": 409, "error": "Duplicate", "message": "The resource already exists"})

    resp = client.post("/api/report", data=FORM, files={"image": ("photo.png", b"img", "image/png")})

    assert resp.status_code == 400
    assert resp.json() == {"error": "The resource already exists"}
    assert fake_supabase.rows("reports") == []
    assert list(upload_dir.iterdir()) == []


def test_insert_failure_leaves_uploaded_image(client, fake_supabase):
    fake_supabase.failures[("reports", "insert")] = PostgrestAPIError({"message": "new row violates row-level security policy", "code": "42501"})

    resp = client.post("/api/report", data=FORM, files={"image": ("photo.png", b"img", "image/png")})

    assert resp.status_code == 400
    assert resp.json()["error"] == "new row violates row-level security policy"
    assert len(fake_supabase.objects) == 1


def test_image_object_name():
    assert image_object_name("photo.png", now_ms=1714567890123) == "images/1714567890123-photo.png"
    assert image_object_name("../../etc/passwd", now_ms=1) == "images/1-passwd"
    assert image_object_name("C:\\Users\\me\\cat.jpg", now_ms=2) == "images/2-cat.jpg"
