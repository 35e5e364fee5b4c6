import pytest


def _wrong(code: str) -> str:
    return "000000" if code != "000000" else "111111"


@pytest.mark.asyncio
async def test_send_2fa_code(client, make_user, notifier):
    user = await make_user()

    response = await client.post("/api/auth/send-2fa-code", json={"userUid": user.uid})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["data"]["userUid"] == user.uid
    assert data["data"]["expiresAt"].startswith("2030-01-07T00:10:00")
    assert notifier.last("two_factor_code")["recipient"] == user.email


@pytest.mark.asyncio
async def test_send_2fa_code_cooldown(client, make_user, clock):
    user = await make_user()
    await client.post("/api/auth/send-2fa-code", json={"userUid": user.uid})

    clock.advance(seconds=60)
    response = await client.post("/api/auth/send-2fa-code", json={"userUid": user.uid})

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "60"
    data = response.json()
    assert data["success"] is False
    assert data["errorCode"] == "RATE_LIMITED"
    assert data["cooldownSeconds"] == 60

    clock.advance(seconds=61)
    response = await client.post("/api/auth/send-2fa-code", json={"userUid": user.uid})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_send_2fa_code_unknown_user(client):
    response = await client.post("/api/auth/send-2fa-code", json={"userUid": "does-not-exist"})

    assert response.status_code == 404
    assert response.json()["errorCode"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_verify_2fa_code_rejects_malformed_code(client, make_user):
    user = await make_user()

    response = await client.post("/api/auth/verify-2fa-code", json={"userUid": user.uid, "code": "12ab"})

    assert response.status_code == 400
    assert response.json()["errorCode"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_verify_2fa_code_wrong_then_right(client, make_user, notifier):
    user = await make_user()
    await client.post("/api/auth/send-2fa-code", json={"userUid": user.uid})
    code = notifier.last_code("two_factor_code")

    wrong = await client.post("/api/auth/verify-2fa-code", json={"userUid": user.uid, "code": _wrong(code)})
    assert wrong.status_code == 400
    assert wrong.json()["errorCode"] == "INVALID_CODE"
    assert wrong.json()["attemptsLeft"] == 4

    right = await client.post("/api/auth/verify-2fa-code", json={"userUid": user.uid, "code": code})
    assert right.status_code == 200
    assert right.json()["data"]["userUid"] == user.uid


@pytest.mark.asyncio
async def test_verify_2fa_code_without_code(client, make_user):
    user = await make_user()

    response = await client.post("/api/auth/verify-2fa-code", json={"userUid": user.uid, "code": "123456"})

    assert response.status_code == 404
    assert response.json()["errorCode"] == "NO_CODE_FOUND"


@pytest.mark.asyncio
async def test_complete_login_with_expired_code(client, make_user, notifier, clock):
    user = await make_user()
    await client.post("/api/auth/send-2fa-code", json={"userUid": user.uid})
    code = notifier.last_code("two_factor_code")

    clock.advance(minutes=11)
    response = await client.post("/api/auth/complete-2fa-login", json={"userUid": user.uid, "code": code})

    assert response.status_code == 410
    assert response.json()["errorCode"] == "CODE_EXPIRED"


@pytest.mark.asyncio
async def test_complete_login_after_reissue_uses_latest_code(client, make_user, notifier, clock):
    user = await make_user()
    await client.post("/api/auth/send-2fa-code", json={"userUid": user.uid})
    first = notifier.last_code("two_factor_code")

    clock.advance(seconds=121)
    await client.post("/api/auth/send-2fa-code", json={"userUid": user.uid})
    second = notifier.last_code("two_factor_code")

    response = await client.post("/api/auth/complete-2fa-login", json={"userUid": user.uid, "code": second})
    assert response.status_code == 200
    assert response.json()["data"]["accessToken"]

    # El primer código fue invalidado al emitir el segundo
    stale = await client.post("/api/auth/complete-2fa-login", json={"userUid": user.uid, "code": first})
    assert stale.status_code == 409
