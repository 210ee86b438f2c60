"""Auth — registration, login, session tokens and the bearer dependency.

Invariants:
    - usernames are unique (case-sensitive); duplicates are rejected with 400
    - plaintext passwords are never stored
    - missing credential -> 401, rejected credential -> 403
"""

import jwt
import pytest
from fastapi import HTTPException

from auth import dependencies, security
from auth import service as auth_service
from auth.security import AuthSecurityError, SessionClaim


async def _register(client, username="alice", password="s3cret", **extra):
    return await client.post("/register", json={"username": username, "password": password, **extra})


# -- Credential manager -----------------------------------------------------


def test_hash_password_roundtrip():
    hashed = security.hash_password("correct horse")

    assert hashed != "correct horse"
    assert security.verify_password("correct horse", hashed)


@pytest.mark.parametrize("wrong", ["correct hors", "Correct horse", "", "correct horse "])
def test_verify_password_rejects_wrong_passwords(wrong):
    hashed = security.hash_password("correct horse")
    assert not security.verify_password(wrong, hashed)


def test_verify_password_tolerates_garbage_hash():
    assert not security.verify_password("x", "not-a-bcrypt-hash")


def test_hash_password_rejects_empty():
    with pytest.raises(AuthSecurityError):
        security.hash_password("")


def test_bcrypt_rounds_are_clamped(monkeypatch):
    monkeypatch.setenv("BCRYPT_ROUNDS", "1")
    assert security.bcrypt_rounds() == 4
    monkeypatch.setenv("BCRYPT_ROUNDS", "nope")
    assert security.bcrypt_rounds() == security.DEFAULT_BCRYPT_ROUNDS


async def test_register_twice_keeps_one_record(client, store):
    first = await _register(client)
    second = await _register(client, password="other")

    assert first.status_code == 201
    assert first.json() == {"message": "User registered successfully"}
    assert second.status_code == 400
    assert second.json() == {"error": "Username already exists"}

    users = await store.load("users")
    assert [u["username"] for u in users] == ["alice"]


async def test_register_is_case_sensitive(client, store):
    await _register(client, "alice")
    res = await _register(client, "Alice")

    assert res.status_code == 201
    assert len(await store.load("users")) == 2


async def test_register_stores_hash_and_admin_flag(client, store):
    await _register(client, "root", "pw", isAdmin=True)
    await _register(client, "plain", "pw")

    root, plain = await store.load("users")
    assert root["isAdmin"] is True
    assert plain["isAdmin"] is False
    assert root["password"] != "pw"
    assert security.verify_password("pw", root["password"])


async def test_register_missing_password_is_400(client):
    res = await client.post("/register", json={"username": "alice"})

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request data"


async def test_login_returns_verifiable_token(client):
    await _register(client, "bob", "pw", isAdmin=True)

    res = await client.post("/login", json={"username": "bob", "password": "pw"})

    assert res.status_code == 200
    claim = security.decode_session_token(res.json()["token"])
    assert claim == SessionClaim(username="bob", is_admin=True)


@pytest.mark.parametrize(
    "username,password",
    [("bob", "wrong"), ("nobody", "pw"), ("Bob", "pw"), ("bob", ""), ("", "pw")],
)
async def test_login_rejects_bad_credentials(client, username, password):
    await _register(client, "bob", "pw")

    res = await client.post("/login", json={"username": username, "password": password})

    assert res.status_code == 401
    assert res.json() == {"error": "Invalid username or password"}


# -- Session issuer ---------------------------------------------------------


def test_token_roundtrips_claim():
    token = security.build_session_token(username="a", is_admin=False)

    claim = security.decode_session_token(token)
    assert claim.to_dict() == {"username": "a", "isAdmin": False}


def test_token_has_no_expiry_by_default():
    token = security.build_session_token(username="a", is_admin=False)

    payload = jwt.decode(token, options={"verify_signature": False})
    assert "exp" not in payload
    assert "iat" in payload


def test_token_expiry_is_opt_in(monkeypatch):
    monkeypatch.setenv("SESSION_TOKEN_EXPIRE_MIN", "5")
    token = security.build_session_token(username="a", is_admin=False)

    payload = jwt.decode(token, options={"verify_signature": False})
    assert payload["exp"] - payload["iat"] == 300


def test_tampered_signature_fails():
    token = security.build_session_token(username="a", is_admin=False)
    header, payload, signature = token.split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

    with pytest.raises(AuthSecurityError):
        security.decode_session_token(".".join([header, payload, flipped]))


def test_token_signed_with_other_secret_fails():
    token = jwt.encode({"username": "a", "isAdmin": True}, "another-secret", algorithm="HS256")

    with pytest.raises(AuthSecurityError):
        security.decode_session_token(token)


def test_token_without_username_fails():
    token = jwt.encode({"isAdmin": True}, security.jwt_secret(), algorithm="HS256")

    with pytest.raises(AuthSecurityError):
        security.decode_session_token(token)


# -- Bearer dependency ------------------------------------------------------


async def test_protected_without_header_is_401(client):
    res = await client.get("/protected")
    assert res.status_code == 401


async def test_protected_with_scheme_but_no_token_is_401(client):
    res = await client.get("/protected", headers={"Authorization": "Bearer"})
    assert res.status_code == 401


@pytest.mark.parametrize("header", ["Basic abc", "Token not.a.jwt", "Bearer not.a.token"])
async def test_protected_with_rejected_credential_is_403(client, header):
    res = await client.get("/protected", headers={"Authorization": header})
    assert res.status_code == 403


def test_blank_token_part_is_presented_and_rejected():
    token = dependencies._extract_bearer_token("Bearer   ")

    assert token == ""
    with pytest.raises(HTTPException) as exc_info:
        auth_service.claim_from_token(token)
    assert exc_info.value.status_code == 403


async def test_valid_token_under_other_scheme_is_accepted(client, auth_header):
    # Only the second header part is read, as with "Bearer <token>".
    token = auth_header["Authorization"].split(" ")[1]

    res = await client.get("/protected", headers={"Authorization": f"JWT {token}"})
    assert res.status_code == 200


async def test_protected_with_valid_token(client, auth_header):
    res = await client.get("/protected", headers=auth_header)

    assert res.status_code == 200
    assert res.json() == {"message": "Protected route accessed successfully"}


async def test_token_outlives_user_record(client, store, auth_header):
    # Verification checks the signature only.
    await store.save("users", [])

    res = await client.get("/protected", headers=auth_header)
    assert res.status_code == 200
