def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_issue_token_and_read_me(client):
    response = client.post(
        "/auth/token",
        data={"username": "Admin@Stockpile.com", "password": "admin123"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] > 0
    assert body["user"]["email"] == "admin@stockpile.com"
    assert body["user"]["role"] == "admin"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json() == body["user"]


def test_issue_token_rejects_bad_password(client):
    response = client.post("/auth/token", data={"username": "user@stockpile.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Email ou mot de passe invalide."


def test_logout_revokes_token(client, associate_headers):
    assert client.get("/auth/me", headers=associate_headers).status_code == 200

    response = client.post("/auth/logout", headers=associate_headers)

    assert response.status_code == 204
    assert client.get("/auth/me", headers=associate_headers).status_code == 401
    assert client.get("/products", headers=associate_headers).status_code == 401


def test_business_routes_require_token(client):
    for path in ("/products", "/restock", "/dashboard", "/reports/overview", "/reports/export"):
        assert client.get(path).status_code == 401


def test_invalid_token_is_rejected(client):
    response = client.get("/products", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_expired_token_is_rejected(client):
    from datetime import timedelta

    from backend.dependencies.security import create_access_token

    token = create_access_token(
        {"sub": "u1", "email": "user@stockpile.com", "role": "associate"},
        expires_delta=timedelta(minutes=-1),
    )

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token expiré"


def test_token_with_unknown_role_is_rejected(client):
    from backend.dependencies.security import create_access_token

    token = create_access_token({"sub": "u1", "email": "x@stockpile.com", "role": "manager"})

    assert client.get("/auth/me", headers={"Authorization": f"Bearer {token}"}).status_code == 401
