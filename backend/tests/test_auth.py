from datetime import timedelta

from fastapi.testclient import TestClient
from jose import jwt

from jobly.main import app
from jobly.services import auth_service

client = TestClient(app)


def test_jwt_secret_loaded():
    assert auth_service.SECRET_KEY is not None
    assert len(auth_service.SECRET_KEY) > 0


def test_token_creation_and_decode():
    token = auth_service.create_token({"username": "demo", "isAdmin": True})
    decoded = auth_service.decode_token(token)
    assert decoded is not None
    assert decoded.username == "demo"
    assert decoded.is_admin is True


def test_token_defaults_to_non_admin():
    token = auth_service.create_token({"username": "demo"})
    payload = jwt.decode(token, auth_service.SECRET_KEY, algorithms=[auth_service.ALGORITHM])
    assert payload["username"] == "demo"
    assert payload["isAdmin"] is False


def test_decode_rejects_wrong_signature():
    token = jwt.encode({"username": "demo", "isAdmin": True}, "not-the-key", algorithm="HS256")
    assert auth_service.decode_token(token) is None


def test_decode_rejects_expired_token():
    token = auth_service.create_token({"username": "demo"}, expires_delta=timedelta(seconds=-1))
    assert auth_service.decode_token(token) is None


def test_password_hash_roundtrip():
    hashed = auth_service.hash_password("secret")
    assert hashed != "secret"
    assert auth_service.verify_password("secret", hashed)
    assert not auth_service.verify_password("other", hashed)


# ============================================================================
# POST /auth/token
# ============================================================================

def test_token_endpoint_works():
    resp = client.post("/auth/token", json={"username": "u1", "password": "password1"})
    assert resp.status_code == 200
    token = resp.json()["token"]
    decoded = auth_service.decode_token(token)
    assert decoded.username == "u1"
    assert decoded.is_admin is False


def test_token_endpoint_wrong_password():
    resp = client.post("/auth/token", json={"username": "u1", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": {"message": "Invalid username/password", "status": 401}}


def test_token_endpoint_unknown_user():
    resp = client.post("/auth/token", json={"username": "nope", "password": "password1"})
    assert resp.status_code == 401


def test_token_endpoint_invalid_data():
    resp = client.post("/auth/token", json={"username": True, "password": 43})
    assert resp.status_code == 400
    assert resp.json()["error"]["status"] == 400


def test_token_endpoint_missing_data():
    resp = client.post("/auth/token", json={"username": "u1"})
    assert resp.status_code == 400


# ============================================================================
# POST /auth/register
# ============================================================================

def test_register_endpoint_works():
    resp = client.post(
        "/auth/register",
        json={
            "username": "bluepill",
            "firstName": "Morpheus",
            "lastName": "toocool41",
            "password": "noredpill",
            "email": "matrixman@matrix.com",
        },
    )
    assert resp.status_code == 201
    decoded = auth_service.decode_token(resp.json()["token"])
    assert decoded.username == "bluepill"
    assert decoded.is_admin is False


def test_register_endpoint_bad_email():
    resp = client.post(
        "/auth/register",
        json={
            "username": "bluepill",
            "firstName": "Morpheus",
            "lastName": "toocool41",
            "password": "noredpill",
            "email": "not-an-email",
        },
    )
    assert resp.status_code == 400


def test_register_endpoint_missing_data():
    resp = client.post("/auth/register", json={"password": "iamme"})
    assert resp.status_code == 400


def test_register_endpoint_duplicate():
    resp = client.post(
        "/auth/register",
        json={
            "username": "u1",
            "firstName": "Morpheus",
            "lastName": "toocool41",
            "password": "noredpill",
            "email": "matrixman@matrix.com",
        },
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Duplicate username: u1"
