import uuid

from fastapi.testclient import TestClient


def test_analytics_reports_counters(
    owner_client: TestClient, client: TestClient, owner_profile
):
    link = owner_client.post(
        "/api/links",
        json={
            "profile_id": str(owner_profile.id),
            "platform": "web",
            "title": "Site",
            "url": "https://olive.example",
        },
    ).json()
    client.get("/api/profile/olive")
    client.post(f"/api/links/{link['id']}/click")
    client.post(f"/api/links/{link['id']}/click")

    response = client.get(f"/api/analytics/{owner_profile.id}")

    assert response.status_code == 200
    assert response.json() == {
        "profile": {"views": 1, "total_clicks": 2},
        "links": [
            {
                "id": link["id"],
                "title": "Site",
                "platform": "web",
                "clicks": 2,
                "url": "https://olive.example",
            }
        ],
    }


def test_analytics_unknown_profile(client: TestClient):
    assert client.get(f"/api/analytics/{uuid.uuid4()}").status_code == 404
