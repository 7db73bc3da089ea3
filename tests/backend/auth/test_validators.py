import pytest

from backend.auth.validators import normalize_email, validate_login, validate_registration
from backend.core.errors import ValidationError


def _registration(**overrides) -> dict:
    data = {
        'name': 'Ana',
        'email': 'ana@x.com',
        'password': 'pw123',
        'password_confirmation': 'pw123',
        'role': 'teacher',
    }
    data.update(overrides)
    return data


def test_validate_registration_accepts_complete_payload() -> None:
    validate_registration(_registration())


@pytest.mark.parametrize(
    ('overrides', 'step'),
    [
        ({'name': None}, 'required_fields'),
        ({'email': '   '}, 'required_fields'),
        ({'password_confirmation': ''}, 'required_fields'),
        ({'role': 'admin'}, 'role'),
        ({'email': 'not-an-email'}, 'email'),
        ({'email': 'ana@'}, 'email'),
        ({'password_confirmation': 'pw124'}, 'password_confirmation'),
    ],
)
def test_validate_registration_reports_failed_step(overrides: dict, step: str) -> None:
    with pytest.raises(ValidationError) as exception_info:
        validate_registration(_registration(**overrides))

    assert exception_info.value.step == step
    assert exception_info.value.to_dict()['step'] == step


def test_missing_field_is_reported_before_password_mismatch() -> None:
    with pytest.raises(ValidationError) as exception_info:
        validate_registration(_registration(name='', password_confirmation='other'))

    assert exception_info.value.step == 'required_fields'


def test_validate_login_requires_email_and_password() -> None:
    with pytest.raises(ValidationError) as exception_info:
        validate_login({'email': 'ana@x.com', 'password': None})

    assert exception_info.value.step == 'required_fields'


def test_validate_login_rejects_malformed_email() -> None:
    with pytest.raises(ValidationError) as exception_info:
        validate_login({'email': 'ana.x.com', 'password': 'pw123'})

    assert exception_info.value.step == 'email'


def test_normalize_email_strips_and_lowercases() -> None:
    assert normalize_email('  Ana@X.com ') == 'ana@x.com'


def test_validate_registration_rejects_password_longer_than_72_bytes() -> None:
    password = 'x' * 73

    with pytest.raises(ValidationError) as exception_info:
        validate_registration(_registration(password=password, password_confirmation=password))

    assert exception_info.value.step == 'password'


def test_validate_registration_counts_password_bytes_not_characters() -> None:
    password = 'ç' * 37

    with pytest.raises(ValidationError) as exception_info:
        validate_registration(_registration(password=password, password_confirmation=password))

    assert exception_info.value.step == 'password'
    validate_registration(_registration(password='x' * 72, password_confirmation='x' * 72))
