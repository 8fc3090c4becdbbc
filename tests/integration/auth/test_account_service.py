import asyncio
import json

import pytest

from src.core.exceptions.handler import ServiceError, ServiceErrorCode
from src.core.service.activity.models import ActivityList
from src.core.service.auth.models.user import MembershipTier

TEST_NAME = "Alice"
TEST_EMAIL = "alice@x.com"
TEST_PASSWORD = "Passw0rd"


@pytest.mark.asyncio
async def test_signup_then_login_returns_public_user(account_service):
    """Login with signup credentials returns the same public fields"""
    created = await account_service.signup(TEST_NAME, TEST_EMAIL, TEST_PASSWORD, MembershipTier.VIP)
    logged_in = await account_service.login(TEST_EMAIL, TEST_PASSWORD)

    assert created.model_dump() == {"name": TEST_NAME, "email": TEST_EMAIL, "membership": "vip"}
    assert logged_in.model_dump() == created.model_dump()
    assert "password" not in logged_in.model_dump()


@pytest.mark.asyncio
async def test_signup_defaults_membership_to_none(account_service, user_repository):
    user = await account_service.signup(TEST_NAME, TEST_EMAIL, TEST_PASSWORD)

    stored = await user_repository.get_user(TEST_EMAIL)
    assert user.membership == "none"
    assert stored.membership == "none"
    assert stored.verified is False
    assert stored.createdAt is not None


@pytest.mark.asyncio
async def test_signup_stores_encoded_credential(account_service, redis_client):
    await account_service.signup(TEST_NAME, TEST_EMAIL, TEST_PASSWORD)

    record = json.loads(await redis_client.get(f"user:{TEST_EMAIL}"))
    assert record["password"] != TEST_PASSWORD
    assert record["password"] == "UGFzc3cwcmQ="
    assert set(record) == {"name", "email", "password", "membership", "createdAt", "verified"}


@pytest.mark.asyncio
@pytest.mark.parametrize("name,email,password", [
    (None, TEST_EMAIL, TEST_PASSWORD),
    (TEST_NAME, "", TEST_PASSWORD),
    (TEST_NAME, TEST_EMAIL, None),
])
async def test_signup_missing_field(account_service, name, email, password):
    with pytest.raises(ServiceError) as exc_info:
        await account_service.signup(name, email, password)

    assert exc_info.value.code == ServiceErrorCode.MISSING_FIELD
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "All fields are required"


@pytest.mark.asyncio
async def test_signup_invalid_email(account_service):
    with pytest.raises(ServiceError) as exc_info:
        await account_service.signup(TEST_NAME, "not-an-email", TEST_PASSWORD)

    assert exc_info.value.code == ServiceErrorCode.INVALID_EMAIL
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_signup_invalid_password(account_service):
    with pytest.raises(ServiceError) as exc_info:
        await account_service.signup(TEST_NAME, TEST_EMAIL, "abcdefgh")

    assert exc_info.value.code == ServiceErrorCode.INVALID_PASSWORD
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_signup_duplicate_email_rejected_regardless_of_password(account_service):
    await account_service.signup(TEST_NAME, TEST_EMAIL, TEST_PASSWORD)

    with pytest.raises(ServiceError) as exc_info:
        await account_service.signup("Other", TEST_EMAIL, "Different99")

    assert exc_info.value.code == ServiceErrorCode.ALREADY_EXISTS
    assert exc_info.value.status_code == 409

    # Original record untouched
    user = await account_service.login(TEST_EMAIL, TEST_PASSWORD)
    assert user.name == TEST_NAME


@pytest.mark.asyncio
async def test_email_is_case_sensitive(account_service):
    await account_service.signup(TEST_NAME, TEST_EMAIL, TEST_PASSWORD)
    await account_service.signup("Upper Alice", TEST_EMAIL.upper(), TEST_PASSWORD)

    with pytest.raises(ServiceError):
        await account_service.signup(TEST_NAME, TEST_EMAIL, TEST_PASSWORD)


@pytest.mark.asyncio
async def test_concurrent_signups_create_exactly_one_account(account_service, activity_repository):
    """SET NX makes create-if-absent atomic: one signup wins, the other is a duplicate"""
    results = await asyncio.gather(
        account_service.signup("First", TEST_EMAIL, TEST_PASSWORD),
        account_service.signup("Second", TEST_EMAIL, "Another123"),
        return_exceptions=True
    )

    successes = [r for r in results if not isinstance(r, Exception)]
    failures = [r for r in results if isinstance(r, ServiceError)]
    assert len(successes) == 1
    assert len(failures) == 1
    assert failures[0].code == ServiceErrorCode.ALREADY_EXISTS

    signups = await activity_repository.recent(ActivityList.SIGNUPS, 10)
    assert len(signups) == 1
    assert signups[0]["name"] == successes[0].name


@pytest.mark.asyncio
async def test_login_unknown_email_and_wrong_password_are_indistinguishable(account_service):
    await account_service.signup(TEST_NAME, TEST_EMAIL, TEST_PASSWORD)

    with pytest.raises(ServiceError) as unknown:
        await account_service.login("nobody@x.com", TEST_PASSWORD)
    with pytest.raises(ServiceError) as wrong:
        await account_service.login(TEST_EMAIL, "Wrong1234")

    assert unknown.value.code == wrong.value.code == ServiceErrorCode.INVALID_CREDENTIALS
    assert unknown.value.message == wrong.value.message == "Invalid email or password"
    assert unknown.value.status_code == wrong.value.status_code == 401


@pytest.mark.asyncio
async def test_login_missing_field(account_service):
    with pytest.raises(ServiceError) as exc_info:
        await account_service.login(TEST_EMAIL, "")

    assert exc_info.value.code == ServiceErrorCode.MISSING_FIELD
    assert exc_info.value.message == "Email and password are required"


@pytest.mark.asyncio
async def test_signup_and_login_are_logged(account_service, activity_repository):
    await account_service.signup(TEST_NAME, TEST_EMAIL, TEST_PASSWORD, MembershipTier.REGULAR, ip="10.0.0.1")
    await account_service.login(TEST_EMAIL, TEST_PASSWORD, ip="10.0.0.2")

    signups = await activity_repository.recent(ActivityList.SIGNUPS, 10)
    logins = await activity_repository.recent(ActivityList.LOGINS, 10)

    assert signups[0]["email"] == TEST_EMAIL
    assert signups[0]["name"] == TEST_NAME
    assert signups[0]["membership"] == "regular"
    assert signups[0]["ip"] == "10.0.0.1"
    assert logins == [{"email": TEST_EMAIL, "timestamp": logins[0]["timestamp"], "ip": "10.0.0.2"}]


@pytest.mark.asyncio
async def test_failed_login_is_not_logged(account_service, activity_repository):
    await account_service.signup(TEST_NAME, TEST_EMAIL, TEST_PASSWORD)

    with pytest.raises(ServiceError):
        await account_service.login(TEST_EMAIL, "Wrong1234")

    assert await activity_repository.recent(ActivityList.LOGINS, 10) == []


@pytest.mark.asyncio
async def test_log_payment_uses_supplied_timestamp(account_service, activity_repository):
    await account_service.log_payment(TEST_EMAIL, "gcash", timestamp="2024-01-01T00:00:00Z", ip="1.2.3.4")

    payments = await activity_repository.recent(ActivityList.PAYMENTS, 10)
    assert payments == [{
        "email": TEST_EMAIL,
        "timestamp": "2024-01-01T00:00:00Z",
        "ip": "1.2.3.4",
        "paymentMethod": "gcash"
    }]


@pytest.mark.asyncio
async def test_log_payment_defaults_timestamp_and_accepts_unknown_email(account_service, activity_repository):
    await account_service.log_payment("stranger@x.com", "paypal")

    payments = await activity_repository.recent(ActivityList.PAYMENTS, 10)
    assert payments[0]["email"] == "stranger@x.com"
    assert payments[0]["timestamp"]


@pytest.mark.asyncio
async def test_log_payment_missing_field(account_service):
    with pytest.raises(ServiceError) as exc_info:
        await account_service.log_payment(TEST_EMAIL, None)

    assert exc_info.value.code == ServiceErrorCode.MISSING_FIELD
    assert exc_info.value.message == "Email and payment method are required"


@pytest.mark.asyncio
async def test_login_with_legacy_membership_tier(account_service, record_store):
    """Records written before tiers were restricted still log in, tier kept as stored"""
    await record_store.set("user:old@x.com", {
        "name": "Old Fan",
        "email": "old@x.com",
        "password": "UGFzc3cwcmQ=",
        "membership": "gold",
        "createdAt": "2023-03-01T00:00:00+00:00",
        "verified": False
    })

    user = await account_service.login("old@x.com", TEST_PASSWORD)

    assert user.model_dump() == {"name": "Old Fan", "email": "old@x.com", "membership": "gold"}


@pytest.mark.asyncio
async def test_login_with_record_missing_optional_fields(account_service, record_store):
    await record_store.set("user:bare@x.com", {
        "name": "Bare",
        "email": "bare@x.com",
        "password": "UGFzc3cwcmQ="
    })

    user = await account_service.login("bare@x.com", TEST_PASSWORD)

    assert user.membership == "none"
