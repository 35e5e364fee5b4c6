from datetime import date

import pytest
from sqlalchemy import func, select

from app.models import BiometricAppointment
from tests.conftest import NEXT_MONDAY, NEXT_SATURDAY


def _booking(user, location, appointment_date=NEXT_MONDAY, appointment_time="09:00"):
    return {
        "userUid": user.uid,
        "locationId": location.id,
        "appointmentDate": appointment_date.isoformat(),
        "appointmentTime": appointment_time,
    }


@pytest.mark.asyncio
async def test_book_appointment(client, make_user, location, notifier):
    user = await make_user()

    response = await client.post("/api/biometric/book", json=_booking(user, location))

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    appointment = data["data"]
    assert appointment["userUid"] == user.uid
    assert appointment["appointmentDate"] == "2030-01-14"
    assert appointment["appointmentTime"] == "09:00"
    assert appointment["status"] == "scheduled"
    assert appointment["location"]["name"] == "Port Moresby Central Office"

    mail = notifier.last("appointment_confirmation")
    assert mail["recipient"] == user.email
    assert mail["date"] == "Monday, January 14, 2030"
    assert mail["time"] == "09:00"
    assert mail["location"] == "Port Moresby Central Office"


@pytest.mark.asyncio
async def test_slot_fills_up(client, make_user, location):
    first = await make_user(email="a@sevispass.com")
    second = await make_user(email="b@sevispass.com")
    third = await make_user(email="c@sevispass.com")

    assert (await client.post("/api/biometric/book", json=_booking(first, location))).status_code == 200
    assert (await client.post("/api/biometric/book", json=_booking(second, location))).status_code == 200

    response = await client.post("/api/biometric/book", json=_booking(third, location))
    assert response.status_code == 409
    assert response.json()["errorCode"] == "SLOT_FULL"

    availability = await client.post("/api/biometric/availability", json={
        "locationId": location.id,
        "date": NEXT_MONDAY.isoformat(),
    })
    slot = availability.json()["data"]["availableSlots"][0]
    assert slot["spotsRemaining"] == 0
    assert slot["isAvailable"] is False


@pytest.mark.asyncio
async def test_user_cannot_book_twice(client, make_user, location, db):
    user = await make_user()
    await client.post("/api/biometric/book", json=_booking(user, location))

    response = await client.post("/api/biometric/book", json=_booking(user, location, appointment_time="10:00"))

    assert response.status_code == 409
    assert response.json()["errorCode"] == "ALREADY_BOOKED"
    total = await db.execute(select(func.count(BiometricAppointment.id)))
    assert total.scalar() == 1


@pytest.mark.asyncio
async def test_unverified_user_cannot_book(client, make_user, location):
    user = await make_user(is_verified=False)

    response = await client.post("/api/biometric/book", json=_booking(user, location))

    assert response.status_code == 403
    assert response.json()["errorCode"] == "NOT_VERIFIED"


@pytest.mark.asyncio
async def test_unknown_user_cannot_book(client, location):
    response = await client.post("/api/biometric/book", json={
        "userUid": "missing",
        "locationId": location.id,
        "appointmentDate": NEXT_MONDAY.isoformat(),
        "appointmentTime": "09:00",
    })

    assert response.status_code == 404
    assert response.json()["errorCode"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_cannot_book_today(client, make_user, location):
    user = await make_user()

    # El reloj marca el lunes 7 de enero en hora local
    response = await client.post("/api/biometric/book", json=_booking(user, location, date(2030, 1, 7)))

    assert response.status_code == 400
    assert response.json()["errorCode"] == "INVALID_DATE"


@pytest.mark.asyncio
async def test_cannot_book_on_weekend(client, make_user, location):
    user = await make_user()

    response = await client.post("/api/biometric/book", json=_booking(user, location, NEXT_SATURDAY))

    assert response.status_code == 400
    assert response.json()["errorCode"] == "INVALID_DATE"


@pytest.mark.asyncio
async def test_cannot_book_unknown_location(client, make_user, location):
    user = await make_user()

    response = await client.post("/api/biometric/book", json={**_booking(user, location), "locationId": 9999})

    assert response.status_code == 404
    assert response.json()["errorCode"] == "LOCATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_cannot_book_missing_or_inactive_slot(client, make_user, location):
    user = await make_user()

    missing = await client.post("/api/biometric/book", json=_booking(user, location, appointment_time="15:00"))
    inactive = await client.post("/api/biometric/book", json=_booking(user, location, appointment_time="11:00"))

    assert missing.status_code == 400
    assert missing.json()["errorCode"] == "INVALID_SLOT"
    assert inactive.json()["errorCode"] == "INVALID_SLOT"


@pytest.mark.asyncio
async def test_book_rejects_malformed_time(client, make_user, location):
    user = await make_user()

    response = await client.post("/api/biometric/book", json=_booking(user, location, appointment_time="9am"))

    assert response.status_code == 400
    assert response.json()["errorCode"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_email_failure_keeps_the_booking(client, make_user, location, notifier):
    user = await make_user()
    notifier.fail = True

    response = await client.post("/api/biometric/book", json=_booking(user, location))
    assert response.status_code == 200

    current = await client.post("/api/biometric/user-appointment", json={"userUid": user.uid})
    data = current.json()["data"]
    assert data["hasAppointment"] is True
    assert data["appointment"]["id"] == response.json()["data"]["id"]
