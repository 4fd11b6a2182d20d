"""Admin UI access control."""

import pytest

from scopelock.models.user import User

REDIRECT_CODES = (302, 303, 307)


@pytest.mark.parametrize("path", ["/admin/", "/admin/user/list", "/admin/proposal/list"])
async def test_anonymous_admin_pages_redirect_to_login(client, path):
    response = await client.get(path)

    assert response.status_code in REDIRECT_CODES
    assert "/admin/login" in response.headers["location"]


async def test_anonymous_user_details_do_not_leak_hash(client, user):
    response = await client.get(f"/admin/user/details/{user.id}")

    assert response.status_code in REDIRECT_CODES
    assert user.hashed_password not in response.text


async def test_anonymous_plan_edit_is_refused(client, user, db_session):
    response = await client.post(
        f"/admin/user/edit/{user.id}",
        data={"email": user.email, "plan": "pro", "is_active": "y"},
    )

    assert response.status_code in REDIRECT_CODES
    assert "/admin/login" in response.headers["location"]
    db_session.expire_all()
    assert db_session.query(User).filter(User.id == user.id).one().plan == "free"


async def test_admin_login_rejects_wrong_password(client):
    response = await client.post("/admin/login", data={"username": "operator", "password": "guess"})

    assert response.status_code == 400


async def test_admin_login_with_configured_credentials(client):
    response = await client.post("/admin/login", data={"username": "operator", "password": "admin-pass"})

    assert response.status_code in REDIRECT_CODES
    assert "/admin/login" not in response.headers["location"]
