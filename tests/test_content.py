import io
import os
from unittest.mock import patch
from uuid import uuid4

from melba.models import Post, Program, db


def _png(name="photo.png"):
    return (io.BytesIO(b"\x89PNG\r\n\x1a\n" + b"0" * 64), name, "image/png")


def _stored_files(upload_dir):
    if not os.path.isdir(upload_dir):
        return []
    return sorted(name for name in os.listdir(upload_dir) if not name.startswith("."))


def _create_post(client, **fields):
    payload = {"title": "Open House", "content": "Come visit us."}
    payload.update(fields)
    return client.post("/admin/api/posts", json=payload)


def _create_event(client, **fields):
    payload = {
        "title": "Open House",
        "eventDate": "2030-05-01T18:00:00Z",
        "location": "Main hall",
    }
    payload.update(fields)
    return client.post("/admin/api/events", json=payload)


def test_create_blog_post_derives_slug(admin_client, app):
    response = _create_post(admin_client)

    assert response.status_code == 201
    body = response.get_json()
    assert body["success"] is True
    assert body["message"] == "Blog post created successfully!"
    assert body["post"]["slug"] == "open-house"
    assert body["post"]["type"] == "blog"
    assert body["post"]["image"] is None


def test_derived_slugs_get_numeric_suffix(admin_client):
    first = _create_post(admin_client).get_json()["post"]
    second = _create_post(admin_client).get_json()["post"]

    assert first["slug"] == "open-house"
    assert second["slug"] == "open-house-2"


def test_explicit_slug_collision_is_rejected(admin_client, app):
    _create_post(admin_client, slug="open-house")

    response = _create_post(admin_client, title="Another title", slug="Open House")

    assert response.status_code == 400
    assert response.get_json() == {
        "success": False,
        "message": "Blog URL (slug) already exists. Please choose a different one.",
    }
    with app.app_context():
        assert Post.query.filter_by(type="blog").count() == 1


def test_event_may_reuse_a_blog_slug(admin_client, app):
    _create_post(admin_client, slug="open-house")

    response = _create_event(admin_client, slug="open-house")

    assert response.status_code == 201
    event = response.get_json()["event"]
    assert event["slug"] == "open-house"
    assert event["eventDate"] == "2030-05-01T18:00:00"
    assert event["location"] == "Main hall"


def test_event_slug_collision_uses_event_message(admin_client):
    _create_event(admin_client, slug="gala")

    response = _create_event(admin_client, slug="gala")

    assert response.status_code == 400
    assert response.get_json()["message"].startswith("Event URL (slug) already exists")


def test_event_requires_date_and_location(admin_client):
    response = admin_client.post("/admin/api/events", json={"title": "Gala"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Event date and location are required."


def test_event_rejects_bad_date(admin_client):
    response = _create_event(admin_client, eventDate="someday")

    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid event date format."


def test_events_listed_by_date(admin_client):
    _create_event(admin_client, title="Later", eventDate="2031-01-01T10:00:00")
    _create_event(admin_client, title="Sooner", eventDate="2030-01-01T10:00:00")
    _create_post(admin_client, title="Not an event")

    titles = [event["title"] for event in admin_client.get("/admin/api/events").get_json()]

    assert titles == ["Sooner", "Later"]


def test_title_length_is_limited(admin_client):
    response = _create_post(admin_client, title="x" * 101)

    assert response.status_code == 400
    assert response.get_json()["message"] == "Title cannot exceed 100 characters."


def test_update_keeps_own_slug(admin_client):
    post = _create_post(admin_client, slug="open-house").get_json()["post"]

    response = admin_client.put(
        f"/admin/api/posts/{post['id']}", json={"title": "Open House 2030", "slug": "open-house"}
    )

    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Blog post updated successfully!"
    assert body["post"]["title"] == "Open House 2030"
    assert body["post"]["slug"] == "open-house"
    assert body["post"]["content"] == "Come visit us."


def test_update_cannot_take_another_slug(admin_client, app):
    _create_post(admin_client, slug="first")
    second = _create_post(admin_client, slug="second").get_json()["post"]

    response = admin_client.put(f"/admin/api/posts/{second['id']}", json={"slug": "first"})

    assert response.status_code == 400
    with app.app_context():
        assert db.session.get(Post, second["id"]).slug == "second"


def test_update_unknown_and_malformed_ids(admin_client):
    missing = admin_client.put(f"/admin/api/posts/{uuid4().hex}", json={"title": "x"})
    malformed = admin_client.put("/admin/api/posts/42", json={"title": "x"})

    assert missing.status_code == 404
    assert missing.get_json()["message"] == "Blog post not found."
    assert malformed.status_code == 400
    assert malformed.get_json()["message"] == "Invalid ID format."


def test_blog_endpoints_do_not_expose_events(admin_client):
    event = _create_event(admin_client).get_json()["event"]

    assert admin_client.get(f"/admin/api/posts/{event['id']}").status_code == 404
    assert admin_client.get("/admin/api/posts").get_json() == []


def test_create_with_image_stores_file(admin_client, upload_dir):
    response = admin_client.post(
        "/admin/api/posts",
        data={"title": "Garden day", "content": "Planting.", "image": _png()},
        content_type="multipart/form-data",
    )

    assert response.status_code == 201
    image = response.get_json()["post"]["image"]
    assert image.startswith("/uploads/") and image.endswith(".png")
    assert _stored_files(upload_dir) == [image.rsplit("/", 1)[1]]

    served = admin_client.get(image)
    assert served.status_code == 200


def test_invalid_image_type_creates_nothing(admin_client, app, upload_dir):
    response = admin_client.post(
        "/admin/api/posts",
        data={
            "title": "Garden day",
            "content": "Planting.",
            "image": (io.BytesIO(b"plain text"), "notes.txt", "text/plain"),
        },
        content_type="multipart/form-data",
    )

    assert response.status_code == 400
    assert response.get_json()["message"] == "Only image files are allowed (JPG, PNG, GIF or WEBP)."
    assert _stored_files(upload_dir) == []
    with app.app_context():
        assert Post.query.count() == 0


def test_slug_collision_removes_uploaded_image(admin_client, upload_dir):
    _create_post(admin_client, slug="garden-day")

    response = admin_client.post(
        "/admin/api/posts",
        data={"title": "Garden day", "slug": "garden-day", "content": "x", "image": _png()},
        content_type="multipart/form-data",
    )

    assert response.status_code == 400
    assert _stored_files(upload_dir) == []


def test_replacing_image_deletes_previous_file(admin_client, upload_dir):
    post = admin_client.post(
        "/admin/api/posts",
        data={"title": "Garden day", "content": "Planting.", "image": _png("old.png")},
        content_type="multipart/form-data",
    ).get_json()["post"]
    old_name = post["image"].rsplit("/", 1)[1]

    response = admin_client.put(
        f"/admin/api/posts/{post['id']}",
        data={"image": _png("new.png")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 200
    new_name = response.get_json()["post"]["image"].rsplit("/", 1)[1]
    assert new_name != old_name
    assert _stored_files(upload_dir) == [new_name]


def test_delete_existing_image_flag(admin_client, upload_dir):
    post = admin_client.post(
        "/admin/api/posts",
        data={"title": "Garden day", "content": "Planting.", "image": _png()},
        content_type="multipart/form-data",
    ).get_json()["post"]

    response = admin_client.put(
        f"/admin/api/posts/{post['id']}",
        data={"deleteExistingImage": "true"},
        content_type="multipart/form-data",
    )

    assert response.status_code == 200
    assert response.get_json()["post"]["image"] is None
    assert _stored_files(upload_dir) == []


def test_delete_post_removes_its_image(admin_client, app, upload_dir):
    post = admin_client.post(
        "/admin/api/posts",
        data={"title": "Garden day", "content": "Planting.", "image": _png()},
        content_type="multipart/form-data",
    ).get_json()["post"]

    response = admin_client.delete(f"/admin/api/posts/{post['id']}")

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "Blog post deleted successfully!"}
    assert _stored_files(upload_dir) == []
    with app.app_context():
        assert Post.query.count() == 0


def test_delete_without_image_skips_file_removal(admin_client):
    post = _create_post(admin_client).get_json()["post"]

    with patch("melba.services.content.delete_upload") as delete_upload:
        response = admin_client.delete(f"/admin/api/posts/{post['id']}")

    assert response.status_code == 200
    delete_upload.assert_not_called()


def test_program_crud(admin_client, app):
    created = admin_client.post(
        "/admin/api/programs",
        json={
            "title": "Youth Robotics",
            "shortDescription": "Build robots after school.",
            "ageRange": "12-18",
        },
    )

    assert created.status_code == 201
    program = created.get_json()["program"]
    assert program["slug"] == "youth-robotics"
    assert program["status"] == "Active"
    assert program["ageRange"] == "12-18"

    updated = admin_client.put(f"/admin/api/programs/{program['id']}", json={"status": "Closed"})
    assert updated.get_json()["program"]["status"] == "Closed"

    duplicate = admin_client.post(
        "/admin/api/programs",
        json={"title": "Robotics", "slug": "youth-robotics", "shortDescription": "x"},
    )
    assert duplicate.status_code == 400
    assert duplicate.get_json()["message"] == (
        "Program URL (slug) already exists. Please choose a different one."
    )

    deleted = admin_client.delete(f"/admin/api/programs/{program['id']}")
    assert deleted.get_json()["message"] == "Program deleted successfully!"
    with app.app_context():
        assert Program.query.count() == 0


def test_program_status_must_be_known(admin_client):
    response = admin_client.post(
        "/admin/api/programs",
        json={"title": "Chess", "shortDescription": "Weekly club.", "status": "Paused"},
    )

    assert response.status_code == 400
    assert response.get_json()["errors"]["status"] == "Status must be one of: Active, Upcoming, Closed."
