"""Registration, login and current user"""

async def test_register_returns_user_and_token(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "Sam", "email": "Sam@Example.com", "password": "secret123"}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "sam@example.com"
    assert body["user"]["role"] == "customer"
    assert body["tokens"]["token_type"] == "bearer"
    assert body["tokens"]["access_token"]

async def test_register_duplicate_email_conflicts(client, customer_token):
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "Other", "email": "jane@example.com", "password": "secret123"}
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_RESOURCE"

async def test_register_short_password_rejected(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "Sam", "email": "sam@example.com", "password": "123"}
    )
    assert response.status_code == 422

async def test_admin_email_gets_admin_role(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "Boss", "email": "admin@example.com", "password": "secret123"}
    )
    assert response.json()["user"]["role"] == "admin"

async def test_login(client, customer_token):
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "jane@example.com", "password": "secret123"}
    )

    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Jane Doe"

async def test_login_wrong_password(client, customer_token):
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "jane@example.com", "password": "wrong-password"}
    )

    assert response.status_code == 401
    error = response.json()["error"]
    assert error["code"] == "INVALID_CREDENTIALS"
    assert error["message"] == "Invalid email or password"

async def test_me(client, auth_headers):
    response = await client.get("/api/v1/auth/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["email"] == "jane@example.com"

async def test_me_requires_token(client):
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401

async def test_me_rejects_garbage_token(client):
    response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
