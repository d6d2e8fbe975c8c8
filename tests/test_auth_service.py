from hostel_manager.core.exceptions import ErrorCode
from hostel_manager.core.security import PrincipalRole, TokenManager
from hostel_manager.db.init_db import seed_admin
from hostel_manager.models.base import ResidentStatus
from hostel_manager.services.auth import AuthService

ADMIN_EMAIL = "warden@hostel.local"
ADMIN_PASSWORD = "warden-pass"


def test_admin_login_issues_token(db_session):
    seed_admin(db_session, ADMIN_EMAIL, ADMIN_PASSWORD)

    token = AuthService(db_session).admin_login(f"  {ADMIN_EMAIL.upper()} ", ADMIN_PASSWORD).unwrap()

    assert token.role == PrincipalRole.ADMIN
    assert token.token_type == "bearer"
    payload = TokenManager.decode_token(token.access_token)
    assert payload["sub"] == token.subject_id
    assert payload["role"] == "admin"


def test_admin_login_wrong_password(db_session):
    seed_admin(db_session, ADMIN_EMAIL, ADMIN_PASSWORD)

    result = AuthService(db_session).admin_login(ADMIN_EMAIL, "wrong")

    assert result.error_code == ErrorCode.AUTHENTICATION_FAILED


def test_seed_admin_keeps_existing_account(db_session):
    first = seed_admin(db_session, ADMIN_EMAIL, ADMIN_PASSWORD)
    second = seed_admin(db_session, ADMIN_EMAIL, "another-password")

    assert first.id == second.id
    assert AuthService(db_session).admin_login(ADMIN_EMAIL, ADMIN_PASSWORD).is_success


def test_resident_login_with_email_and_phone(db_session, make_resident):
    resident = make_resident(email="meera@example.com", phone="9000000001")

    token = AuthService(db_session).resident_login("Meera@Example.com", " 9000000001 ").unwrap()

    assert token.role == PrincipalRole.RESIDENT
    assert token.subject_id == resident.id
    assert token.display_name == resident.name


def test_resident_login_no_match(db_session, make_resident):
    make_resident(email="meera@example.com", phone="9000000001")

    result = AuthService(db_session).resident_login("meera@example.com", "9000000002")

    assert result.error_code == ErrorCode.AUTHENTICATION_FAILED
    assert result.error.message == "Invalid email or phone number"


def test_resident_login_refuses_duplicate_accounts(db_session, make_resident):
    make_resident(email="twin@example.com", phone="9000000003")
    make_resident(email="twin@example.com", phone="9000000003")

    result = AuthService(db_session).resident_login("twin@example.com", "9000000003")

    assert result.error_code == ErrorCode.DUPLICATE_ACCOUNT


def test_resident_login_refuses_inactive(db_session, occupancy, make_resident):
    resident = make_resident(email="left@example.com", phone="9000000004")
    occupancy.change_resident_status(resident.id, ResidentStatus.VACATED).unwrap()

    result = AuthService(db_session).resident_login("left@example.com", "9000000004")

    assert result.error_code == ErrorCode.ACCOUNT_DEACTIVATED


def test_resident_login_requires_both_fields(db_session):
    result = AuthService(db_session).resident_login("someone@example.com", "  ")

    assert result.error_code == ErrorCode.MISSING_REQUIRED_FIELD
    assert result.error.details["missing"] == ["phone"]


def test_logout_revokes_token(db_session):
    seed_admin(db_session, ADMIN_EMAIL, ADMIN_PASSWORD)
    service = AuthService(db_session)
    token = service.admin_login(ADMIN_EMAIL, ADMIN_PASSWORD).unwrap()
    principal = service.authenticate(token.access_token).unwrap()

    assert service.logout(principal).is_success
    assert service.logout(principal).is_success

    assert service.authenticate(token.access_token).error_code == ErrorCode.TOKEN_INVALID


def test_garbage_token_is_invalid(db_session):
    assert AuthService(db_session).authenticate("not-a-token").error_code == ErrorCode.TOKEN_INVALID
