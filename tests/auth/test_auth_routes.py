import pytest
from fastapi import status
from sqlalchemy import select

from codearena.business.services import create_refresh_token, decode_token
from codearena.data.schemas import User


def cookie_names(response) -> set:
    return {header.split("=", 1)[0] for header in response.headers.get_list("set-cookie")}


# Test user registration
@pytest.mark.asyncio
async def test_register_success(client, test_db):
    # Test data
    user_data = {"username": "newuser", "email": "New@Example.com", "password": "password123"}

    # Make request
    response = await client.post("/api/v1/auth/register", json=user_data)

    # Check response
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["user"]["username"] == "newuser"
    assert data["user"]["email"] == "new@example.com"
    assert data["user"]["total_submissions"] == 0
    assert data["user"]["total_solved"] == 0
    assert decode_token(data["token"])["user"]["username"] == "newuser"

    # Check cookies
    assert {"access_token", "refresh_token"} <= cookie_names(response)

    # Check database
    result = await test_db.execute(select(User).where(User.username == "newuser"))
    user = result.scalar_one()
    assert user.password_hash != "password123"
    assert user.refresh_token is not None


@pytest.mark.asyncio
async def test_register_existing_user(client, test_user):
    user_data = {
        "username": test_user.username,
        "email": "someone.else@example.com",
        "password": "password123",
    }

    response = await client.post("/api/v1/auth/register", json=user_data)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "already exists" in response.json()["message"]


@pytest.mark.asyncio
async def test_register_short_password(client):
    user_data = {"username": "newuser", "email": "new@example.com", "password": "short"}

    response = await client.post("/api/v1/auth/register", json=user_data)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["message"] == "Validation error"


# Test user login
@pytest.mark.asyncio
async def test_login_success(client, test_user):
    login_data = {"email": test_user.email, "password": "password123"}

    response = await client.post("/api/v1/auth/login", json=login_data)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["user"]["id"] == str(test_user.id)
    assert data["user"]["username"] == test_user.username
    assert data["token"]
    assert {"access_token", "refresh_token"} <= cookie_names(response)


@pytest.mark.asyncio
async def test_login_invalid_credentials(client, test_user):
    login_data = {"email": test_user.email, "password": "wrongpassword"}

    response = await client.post("/api/v1/auth/login", json=login_data)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"message": "Invalid credentials", "error": None}


@pytest.mark.asyncio
async def test_login_unknown_email(client):
    login_data = {"email": "nobody@example.com", "password": "password123"}

    response = await client.post("/api/v1/auth/login", json=login_data)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


# Test getting the current user
@pytest.mark.asyncio
async def test_get_me(client, auth_headers, test_user):
    response = await client.get("/api/v1/auth/me", headers=auth_headers(test_user))

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == str(test_user.id)
    assert data["email"] == test_user.email
    assert data["role"] == "user"
    assert data["total_solved"] == 0


@pytest.mark.asyncio
async def test_get_me_without_token(client):
    response = await client.get("/api/v1/auth/me")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_get_me_with_invalid_token(client):
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message"] == "Invalid or expired token"


# A refresh token is not accepted where an access token is expected
@pytest.mark.asyncio
async def test_get_me_with_refresh_token(client, test_user):
    token = create_refresh_token({"id": str(test_user.id), "username": test_user.username})

    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


# Test refreshing tokens
@pytest.mark.asyncio
async def test_refresh_tokens(client, test_user, fake_redis):
    token = create_refresh_token(
        {"id": str(test_user.id), "username": test_user.username, "role": "user"}
    )

    response = await client.get(
        "/api/v1/auth/refresh", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Tokens refreshed"
    assert decode_token(response.json()["token"])["is_refresh"] is False
    assert decode_token(token)["jti"] in fake_redis.blocklist

    # The old refresh token is now revoked
    response = await client.get(
        "/api/v1/auth/refresh", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


# Test logout
@pytest.mark.asyncio
async def test_logout(client, auth_headers, test_db, test_user, fake_redis):
    headers = auth_headers(test_user)

    response = await client.get("/api/v1/auth/logout", headers=headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Logged out successfully"
    assert len(fake_redis.blocklist) == 1

    await test_db.refresh(test_user)
    assert test_user.refresh_token is None

    # The token cannot be used again
    response = await client.get("/api/v1/auth/me", headers=headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message"] == "Token has been revoked"
