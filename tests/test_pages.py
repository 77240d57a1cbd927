from datetime import datetime, timedelta

import pytest

from melba.models import Post, Program, db


@pytest.fixture()
def seeded(app):
    with app.app_context():
        db.session.add_all(
            [
                Post(type="blog", title="Spring recap", slug="spring-recap", content="It was great."),
                Post(
                    type="event",
                    title="Summer fair",
                    slug="summer-fair",
                    event_date=datetime.utcnow() + timedelta(days=30),
                    location="Park",
                ),
                Post(
                    type="event",
                    title="Winter gala",
                    slug="winter-gala",
                    event_date=datetime.utcnow() - timedelta(days=30),
                    location="Hall",
                ),
                Program(title="Youth Robotics", slug="youth-robotics", short_description="Robots."),
            ]
        )
        db.session.commit()


@pytest.mark.parametrize(
    "path", ["/", "/about", "/programs", "/events", "/blog", "/donate", "/contact", "/admin/login"]
)
def test_public_pages_render(client, seeded, path):
    response = client.get(path)

    assert response.status_code == 200
    assert b"Melba Community Center" in response.data


def test_detail_pages(client, seeded):
    assert b"Spring recap" in client.get("/blog/spring-recap").data
    assert b"Summer fair" in client.get("/events/summer-fair").data
    assert b"Youth Robotics" in client.get("/programs/youth-robotics").data


def test_events_page_splits_upcoming_and_past(client, seeded):
    body = client.get("/events").get_data(as_text=True)

    assert body.index("Summer fair") < body.index("Winter gala")


def test_unknown_slug_is_404(client, seeded):
    assert client.get("/blog/summer-fair").status_code == 404
    assert client.get("/programs/nope").status_code == 404


def test_contact_page_shows_result_flags(client):
    assert b"Thank you" in client.get("/contact?success=1").data


def test_unknown_api_route_returns_json(client):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.get_json() == {"success": False, "message": "Not found."}


def test_security_headers(client):
    response = client.get("/")

    csp = response.headers["Content-Security-Policy"]
    assert "default-src 'self'" in csp
    assert "object-src 'none'" in csp
    assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
