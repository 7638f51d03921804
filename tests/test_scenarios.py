"""End-to-end flows across auth, bio pages and links."""

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from linkboard.user.models import User


def _register_and_verify(client: TestClient, session: Session, email: str) -> None:
    response = client.post(
        "/api/auth/register", json={"email": email, "password": "Passw0rd!"}
    )
    assert response.status_code == 200
    user = session.exec(select(User).where(User.email == email)).one()
    verify = client.get(
        "/api/auth/verify-email", params={"token": user.email_verification_token}
    )
    assert verify.status_code == 200
    login = client.post("/api/auth/login", json={"email": email, "password": "Passw0rd!"})
    assert login.status_code == 200


def test_new_account_gets_default_page_then_switches_default(
    client: TestClient, session: Session
):
    _register_and_verify(client, session, "a@x.com")

    pages = client.get("/api/bio-pages").json()
    assert [(p["page_name"], p["is_default"]) for p in pages] == [("a", True)]

    blog = client.post(
        "/api/bio-pages",
        json={"page_name": "blog", "display_name": "My blog", "bio": "Posts"},
    ).json()
    assert blog["is_default"] is False

    response = client.post(f"/api/bio-pages/{blog['id']}/set-default")
    assert response.status_code == 200

    pages = {p["page_name"]: p["is_default"] for p in client.get("/api/bio-pages").json()}
    assert pages == {"a": False, "blog": True}


def test_default_page_name_gets_suffix_when_taken(
    client: TestClient, session: Session, make_user, make_profile
):
    make_profile(make_user("someone@y.com"), "a", is_default=True)

    _register_and_verify(client, session, "a@x.com")

    pages = client.get("/api/bio-pages").json()
    assert [p["page_name"] for p in pages] == ["a1"]


def test_published_links_show_on_public_page(client: TestClient, session: Session):
    _register_and_verify(client, session, "writer@x.com")
    page = client.get("/api/auth/user").json()["profile"]

    client.post(
        "/api/links",
        json={
            "profile_id": page["id"],
            "platform": "mastodon",
            "title": "Toots",
            "url": "https://mastodon.example/@writer",
        },
    )

    public = client.get(f"/api/profile/{page['page_name']}").json()
    assert [link["title"] for link in public["links"]] == ["Toots"]
