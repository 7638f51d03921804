"""Tests for the admin JSON API."""

import uuid
from datetime import UTC, datetime

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from linkboard.bio_page.models import Profile
from linkboard.user.models import User

# --- Access control ---


def test_admin_routes_require_login(client: TestClient):
    assert client.get("/api/admin/stats").status_code == 401


def test_admin_routes_reject_regular_users(owner_client: TestClient):
    response = owner_client.get("/api/admin/stats")

    assert response.status_code == 403
    assert response.json()["type"] == "admin_required"


# --- Dashboard ---


def test_stats(admin_client: TestClient, owner, owner_profile, session: Session):
    owner_profile.profile_views = 7
    owner_profile.link_clicks = 3
    session.add(owner_profile)
    session.commit()

    response = admin_client.get("/api/admin/stats")

    assert response.status_code == 200
    body = response.json()
    assert body["stats"] == {
        "users": 2,
        "profiles": 1,
        "links": 0,
        "recent_users": 2,
        "total_views": 7,
        "total_clicks": 3,
    }
    assert {u["email"] for u in body["recent_users"]} == {
        "owner@example.com",
        "admin@example.com",
    }
    assert body["top_profiles"][0]["page_name"] == "olive"

    growth = body["growth"]
    assert len(growth) == 30
    assert [point["day"] for point in growth] == sorted(p["day"] for p in growth)
    assert growth[-1]["day"] == datetime.now(UTC).date().isoformat()
    assert sum(point["users"] for point in growth) == 2
    assert sum(point["profiles"] for point in growth) == 1


def test_activity_is_empty(admin_client: TestClient):
    response = admin_client.get("/api/admin/activity")

    assert response.status_code == 200
    assert response.json() == []


def test_system_health(admin_client: TestClient, owner_profile):
    response = admin_client.get("/api/admin/system/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["database"] == "ok"
    assert body["users"] == 2
    assert body["profiles"] == 1
    assert body["new_users_24h"] == 2
    assert body["uptime"] >= 0


# --- User listing ---


def _seed_users(make_user) -> None:
    make_user("owner@example.com", first_name="Olive", last_name="Owner")
    make_user(
        "pending@example.com", verified=False, first_name="Pat", last_name="Pending"
    )
    make_user("zed@example.com", first_name="Zed", last_name="Adams")


def test_list_users_paginates(admin_client: TestClient, make_user):
    _seed_users(make_user)

    first = admin_client.get(
        "/api/admin/users",
        params={"sort_by": "email", "sort_order": "asc", "limit": 2, "page": 1},
    ).json()
    second = admin_client.get(
        "/api/admin/users",
        params={"sort_by": "email", "sort_order": "asc", "limit": 2, "page": 2},
    ).json()

    assert [u["email"] for u in first["users"]] == [
        "admin@example.com",
        "owner@example.com",
    ]
    assert [u["email"] for u in second["users"]] == [
        "pending@example.com",
        "zed@example.com",
    ]
    assert first["pagination"] == {"page": 1, "limit": 2, "total": 4, "total_pages": 2}
    assert "password_hash" not in first["users"][0]


def test_list_users_search_is_case_insensitive(admin_client: TestClient, make_user):
    _seed_users(make_user)

    body = admin_client.get("/api/admin/users", params={"search": "OLIVE"}).json()

    assert [u["email"] for u in body["users"]] == ["owner@example.com"]


def test_list_users_filters(admin_client: TestClient, make_user):
    _seed_users(make_user)

    def emails(filter_by: str) -> set[str]:
        body = admin_client.get("/api/admin/users", params={"filter_by": filter_by})
        return {u["email"] for u in body.json()["users"]}

    assert emails("admin") == {"admin@example.com"}
    assert emails("unverified") == {"pending@example.com"}
    assert "pending@example.com" not in emails("verified")


def test_list_users_sort_by_name(admin_client: TestClient, make_user):
    _seed_users(make_user)

    body = admin_client.get(
        "/api/admin/users",
        params={"sort_by": "name", "sort_order": "asc", "filter_by": "verified"},
    ).json()

    # Ada (admin) has no last name; NULLs sort first on SQLite
    assert [u["last_name"] for u in body["users"]] == [None, "Adams", "Owner"]


def test_list_users_rejects_bad_paging(admin_client: TestClient):
    assert admin_client.get("/api/admin/users", params={"limit": 500}).status_code == 400
    assert admin_client.get("/api/admin/users", params={"page": 0}).status_code == 400
    assert (
        admin_client.get("/api/admin/users", params={"sort_by": "password"}).status_code
        == 400
    )


def test_list_users_past_last_page(admin_client: TestClient):
    body = admin_client.get("/api/admin/users", params={"page": 9}).json()

    assert body["users"] == []
    assert body["pagination"]["total"] == 1


# --- Profile listing ---


def test_list_profiles(admin_client: TestClient, owner, owner_profile, make_profile):
    make_profile(owner, "olive-work", bio="Consulting", profile_views=50)

    by_views = admin_client.get(
        "/api/admin/profiles", params={"sort_by": "views", "sort_order": "desc"}
    ).json()
    secondary = admin_client.get(
        "/api/admin/profiles", params={"filter_by": "secondary"}
    ).json()
    searched = admin_client.get(
        "/api/admin/profiles", params={"search": "consult"}
    ).json()

    assert [p["page_name"] for p in by_views["profiles"]] == ["olive-work", "olive"]
    assert [p["page_name"] for p in secondary["profiles"]] == ["olive-work"]
    assert [p["page_name"] for p in searched["profiles"]] == ["olive-work"]
    assert by_views["pagination"]["total"] == 2


# --- User mutations ---


def test_delete_user_cascades(
    admin_client: TestClient, owner, owner_profile, session: Session
):
    response = admin_client.delete(f"/api/admin/users/{owner.id}")

    assert response.status_code == 204
    session.expire_all()
    assert session.get(User, owner.id) is None
    assert session.exec(select(Profile)).all() == []


def test_delete_self_is_forbidden(admin_client: TestClient, admin_user):
    response = admin_client.delete(f"/api/admin/users/{admin_user.id}")

    assert response.status_code == 403
    assert response.json()["type"] == "self_modification_forbidden"


def test_delete_unknown_user(admin_client: TestClient):
    assert admin_client.delete(f"/api/admin/users/{uuid.uuid4()}").status_code == 404


def test_bulk_delete(admin_client: TestClient, owner, other_user, session: Session):
    response = admin_client.post(
        "/api/admin/users/bulk-delete",
        json={"user_ids": [str(owner.id), str(other_user.id), str(uuid.uuid4())]},
    )

    assert response.status_code == 200
    assert response.json()["count"] == 2
    session.expire_all()
    assert [u.email for u in session.exec(select(User)).all()] == ["admin@example.com"]


def test_bulk_delete_including_self_deletes_nothing(
    admin_client: TestClient, admin_user, owner, session: Session
):
    response = admin_client.post(
        "/api/admin/users/bulk-delete",
        json={"user_ids": [str(owner.id), str(admin_user.id)]},
    )

    assert response.status_code == 403
    session.expire_all()
    assert session.get(User, owner.id) is not None


def test_bulk_delete_requires_ids(admin_client: TestClient):
    response = admin_client.post("/api/admin/users/bulk-delete", json={"user_ids": []})

    assert response.status_code == 400


def test_toggle_admin(admin_client: TestClient, owner):
    response = admin_client.patch(
        f"/api/admin/users/{owner.id}/admin", json={"is_admin": True}
    )

    assert response.status_code == 200
    assert response.json()["is_admin"] is True


def test_self_demotion_is_forbidden(admin_client: TestClient, admin_user, session: Session):
    response = admin_client.patch(
        f"/api/admin/users/{admin_user.id}/admin", json={"is_admin": False}
    )

    assert response.status_code == 403
    session.refresh(admin_user)
    assert admin_user.is_admin is True


def test_bulk_admin(admin_client: TestClient, owner, other_user, session: Session):
    response = admin_client.post(
        "/api/admin/users/bulk-admin",
        json={"user_ids": [str(owner.id), str(other_user.id)], "is_admin": True},
    )

    assert response.status_code == 200
    assert response.json()["count"] == 2
    session.expire_all()
    assert session.get(User, owner.id).is_admin is True
    assert session.get(User, other_user.id).is_admin is True


def test_bulk_demote_including_self_is_forbidden(
    admin_client: TestClient, admin_user, owner, session: Session
):
    owner.is_admin = True
    session.add(owner)
    session.commit()

    response = admin_client.post(
        "/api/admin/users/bulk-admin",
        json={"user_ids": [str(owner.id), str(admin_user.id)], "is_admin": False},
    )

    assert response.status_code == 403
    session.expire_all()
    assert session.get(User, owner.id).is_admin is True


# --- CSV export ---


def test_export_users_csv(admin_client: TestClient, owner):
    response = admin_client.get("/api/admin/users/export")

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/csv; charset=utf-8"
    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="users-')
    assert disposition.endswith('.csv"')

    lines = response.text.split("\r\n")
    assert lines[0] == "id,email,first_name,last_name,email_verified,is_admin,created_at"
    owner_prefix = f"{owner.id},owner@example.com,Olive,Owner,true,false,"
    assert any(line.startswith(owner_prefix) for line in lines)


def test_export_profiles_escapes_quotes(admin_client: TestClient, owner, make_profile):
    make_profile(owner, "quoted", bio='Say "hi", please', is_default=True)

    response = admin_client.get("/api/admin/profiles/export")

    assert response.status_code == 200
    header = response.text.split("\r\n", 1)[0]
    assert header == (
        "id,user_id,page_name,display_name,bio,"
        "profile_views,link_clicks,is_default,created_at"
    )
    assert '"Say ""hi"", please"' in response.text


def test_export_requires_admin(owner_client: TestClient):
    assert owner_client.get("/api/admin/users/export").status_code == 403


# --- Impersonation ---


def test_impersonation_round_trip(admin_client: TestClient, admin_user, owner):
    response = admin_client.post(f"/api/admin/users/{owner.id}/impersonate")

    assert response.status_code == 200
    assert response.json()["message"] == "Now impersonating owner@example.com"

    me = admin_client.get("/api/auth/user").json()
    assert me["user"]["email"] == "owner@example.com"
    assert me["is_impersonating"] is True

    # The effective user is not an admin
    assert admin_client.get("/api/admin/stats").status_code == 403

    stop = admin_client.post("/api/admin/users/stop-impersonate")
    assert stop.status_code == 200
    assert stop.json()["user"]["email"] == "admin@example.com"

    me = admin_client.get("/api/auth/user").json()
    assert me["user"]["id"] == str(admin_user.id)
    assert me["is_impersonating"] is False


def test_nested_impersonation_is_rejected(admin_client: TestClient, make_user):
    second_admin = make_user("second-admin@example.com", is_admin=True)
    target = make_user("target@example.com")
    admin_client.post(f"/api/admin/users/{second_admin.id}/impersonate")

    response = admin_client.post(f"/api/admin/users/{target.id}/impersonate")

    assert response.status_code == 400
    assert response.json()["type"] == "impersonation_error"


def test_impersonate_self_or_unknown(admin_client: TestClient, admin_user):
    assert (
        admin_client.post(f"/api/admin/users/{admin_user.id}/impersonate").status_code
        == 400
    )
    assert (
        admin_client.post(f"/api/admin/users/{uuid.uuid4()}/impersonate").status_code
        == 404
    )


def test_impersonate_requires_admin(owner_client: TestClient, other_user):
    response = owner_client.post(f"/api/admin/users/{other_user.id}/impersonate")

    assert response.status_code == 403


def test_stop_without_impersonation(owner_client: TestClient):
    response = owner_client.post("/api/admin/users/stop-impersonate")

    assert response.status_code == 400


def test_stop_after_admin_was_demoted_ends_session(
    admin_client: TestClient, admin_user, owner, session: Session
):
    admin_client.post(f"/api/admin/users/{owner.id}/impersonate")
    admin_user.is_admin = False
    session.add(admin_user)
    session.commit()

    response = admin_client.post("/api/admin/users/stop-impersonate")

    assert response.status_code == 403
    assert admin_client.get("/api/auth/user").status_code == 401
