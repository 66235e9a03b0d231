"""HTTP and websocket tests for the notification and admin endpoints."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool
from starlette.websockets import WebSocketDisconnect

from conftest import draft_notification
from talentbook.application.use_cases.users import create_user
from talentbook.domain.entities import User
from talentbook.infrastructure.database import (
    build_engine,
    get_db,
    get_session_factory,
    initialize_database,
)
from talentbook.infrastructure.models import NotificationModel
from talentbook.infrastructure.repositories import NotificationRepository, UserRepository
from talentbook.infrastructure.security import create_user_access_token
from talentbook.main import create_app


@pytest.fixture()
def client(session_factory):
    app = create_app(manage_database=False)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as test_client:
        yield test_client


def auth_headers(user):
    return {"Authorization": f"Bearer {create_user_access_token(user)}"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_login_issues_token_and_rejects_bad_credentials(client, session):
    create_user(
        session, name="Jane Doe", email="Jane@Example.com", password="s3cret", role="talent"
    )

    response = client.post(
        "/auth/token", data={"username": "jane@example.com", "password": "s3cret"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["role"] == "talent"

    me = client.get(
        "/notifications/unread-count",
        headers={"Authorization": f"Bearer {body['access_token']}"},
    )
    assert me.status_code == 200

    wrong = client.post(
        "/auth/token", data={"username": "jane@example.com", "password": "nope"}
    )
    assert wrong.status_code == 401


def test_listing_requires_authentication(client):
    assert client.get("/notifications/").status_code == 401


def test_listing_is_scoped_to_the_caller(client, session, make_user):
    alice = make_user()
    bob = make_user()
    repository = NotificationRepository(session)
    repository.create(draft_notification(alice.id, "for alice"))
    repository.create(draft_notification(bob.id, "for bob"))

    response = client.get("/notifications/", headers=auth_headers(alice))

    assert response.status_code == 200
    items = response.json()
    assert [item["title"] for item in items] == ["for alice"]
    assert items[0]["userId"] == alice.id
    assert items[0]["actionUrl"] == "/talent/dashboard"
    assert items[0]["read"] is False


def test_unread_count_and_read_endpoints(client, session, make_user):
    alice = make_user()
    bob = make_user()
    repository = NotificationRepository(session)
    first = repository.create(draft_notification(alice.id))
    repository.create(draft_notification(alice.id))
    foreign = repository.create(draft_notification(bob.id))
    headers = auth_headers(alice)

    assert client.get("/notifications/unread-count", headers=headers).json() == {"count": 2}

    assert client.patch(f"/notifications/{first.id}/read", headers=headers).status_code == 204
    assert client.patch(f"/notifications/{foreign.id}/read", headers=headers).status_code == 204
    assert client.patch("/notifications/unknown/read", headers=headers).status_code == 204
    assert client.get("/notifications/unread-count", headers=headers).json() == {"count": 1}

    unread = client.get("/notifications/?unread_only=true", headers=headers).json()
    assert len(unread) == 1

    assert client.post("/notifications/read-all", headers=headers).json() == {"updated": 1}
    assert client.post("/notifications/read-all", headers=headers).json() == {"updated": 0}

    session.expire_all()
    assert repository.get(foreign.id).read is False


def test_store_failure_maps_to_service_unavailable(client, make_user, engine):
    user = make_user()
    NotificationModel.__table__.drop(bind=engine)

    response = client.get("/notifications/unread-count", headers=auth_headers(user))

    assert response.status_code == 503
    assert response.json() == {"detail": "Notification store unavailable"}


def test_admin_endpoints_reject_non_admins(client, make_user):
    talent = make_user(role="talent")

    response = client.post(
        "/admin/notifications/announcements",
        json={"title": "Hi", "message": "Hello"},
        headers=auth_headers(talent),
    )

    assert response.status_code == 403


def test_announcement_targets_roles(client, make_user):
    admin = make_user(role="admin")
    talent = make_user(role="talent")
    customer = make_user(role="client")

    response = client.post(
        "/admin/notifications/announcements",
        json={"title": "Maintenance", "message": "Tonight at 22:00", "announcementId": "an_1"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 201
    body = response.json()
    assert {item["userId"] for item in body} == {talent.id, customer.id}
    assert all(item["type"] == "system_announcement" for item in body)
    assert all(item["data"] == {"announcementId": "an_1"} for item in body)


def test_announcement_validation_errors(client, make_user):
    admin = make_user(role="admin")
    headers = auth_headers(admin)

    blank = client.post(
        "/admin/notifications/announcements",
        json={"title": "Hi", "message": "Hello", "recipientIds": [" "]},
        headers=headers,
    )
    assert blank.status_code == 422
    assert blank.json() == {"detail": "recipient_id is required"}

    unknown_role = client.post(
        "/admin/notifications/announcements",
        json={"title": "Hi", "message": "Hello", "roles": ["guest"]},
        headers=headers,
    )
    assert unknown_role.status_code == 400


def test_purge_endpoint_reports_removed_rows(client, make_user):
    admin = make_user(role="admin")

    response = client.post("/admin/notifications/purge?days=30", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json() == {"removed": 0, "days": 30}


def test_talent_approval_activates_and_notifies(client, session, make_user):
    admin = make_user(role="admin")
    talent = make_user(role="talent", status="pending")

    response = client.patch(
        f"/admin/talents/{talent.id}/approval",
        json={"status": "approved"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    assert response.json()["status"] == "active"
    listed = NotificationRepository(session).list_for_user(talent.id)
    assert [n.title for n in listed] == ["Profile approved!"]


def test_talent_rejection_suspends_without_notification(client, session, make_user):
    admin = make_user(role="admin")
    talent = make_user(role="talent", status="pending")

    response = client.patch(
        f"/admin/talents/{talent.id}/approval",
        json={"status": "rejected"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    session.expire_all()
    assert UserRepository(session).get(talent.id).status == "suspended"
    assert NotificationRepository(session).unread_count(talent.id) == 0


def test_talent_approval_for_unknown_talent(client, make_user):
    admin = make_user(role="admin")
    customer = make_user(role="client")

    for target in ("missing", customer.id):
        response = client.patch(
            f"/admin/talents/{target}/approval",
            json={"status": "approved"},
            headers=auth_headers(admin),
        )
        assert response.status_code == 404


def test_websocket_sends_unread_items_and_handles_ack(client, session, make_user):
    user = make_user()
    pending = NotificationRepository(session).create(draft_notification(user.id))
    token = create_user_access_token(user)

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        init = websocket.receive_json()
        assert init["type"] == "init"
        assert [item["id"] for item in init["data"]] == [pending.id]

        websocket.send_json({"type": "ack", "ids": [pending.id]})
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

    session.expire_all()
    assert NotificationRepository(session).unread_count(user.id) == 0


def test_websocket_rejects_invalid_token(client):
    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/notifications/ws?token=invalid") as websocket:
            websocket.receive_json()

    assert exc_info.value.code == 1008


def test_websocket_ack_survives_a_store_failure(client, session, make_user, engine):
    user = make_user()
    pending = NotificationRepository(session).create(draft_notification(user.id))
    token = create_user_access_token(user)

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        assert websocket.receive_json()["type"] == "init"
        NotificationModel.__table__.drop(bind=engine)

        websocket.send_json({"type": "ack", "ids": [pending.id]})
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}


@pytest.fixture()
def single_connection_app(tmp_path):
    """An app whose pool holds exactly one connection."""

    engine = build_engine(
        f"sqlite:///{tmp_path / 'talentbook.db'}",
        poolclass=QueuePool,
        pool_size=1,
        max_overflow=0,
        pool_timeout=2,
    )
    initialize_database(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app = create_app(manage_database=False)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: factory
    with TestClient(app) as test_client:
        yield test_client, factory
    engine.dispose()


def test_open_websocket_does_not_hold_a_database_connection(single_connection_app):
    client, factory = single_connection_app
    with factory() as db:
        user = UserRepository(db).create(
            User(id=None, role="talent", name="Jane Doe", email="jane@example.com", password="x")
        )
        NotificationRepository(db).create(draft_notification(user.id))
    headers = auth_headers(user)

    with client.websocket_connect(
        f"/notifications/ws?token={create_user_access_token(user)}"
    ) as websocket:
        assert len(websocket.receive_json()["data"]) == 1

        response = client.get("/notifications/unread-count", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"count": 1}

        ids = [item["id"] for item in client.get("/notifications/", headers=headers).json()]
        websocket.send_json({"type": "ack", "ids": ids})
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        assert client.get("/notifications/unread-count", headers=headers).json() == {
            "count": 0
        }
