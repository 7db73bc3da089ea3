"""Step-by-step payload validation for the register and login flows.

Each check raises ``ValidationError`` carrying the name of the step that
failed, so clients can point at the offending field.
"""

from email_validator import EmailNotValidError, validate_email

from backend.core.errors import ValidationError
from backend.models.user import USER_ROLES

LOGIN_FIELDS = ("email", "password")
REGISTER_FIELDS = ("name", "email", "password", "password_confirmation", "role")

STEP_REQUIRED_FIELDS = "required_fields"
STEP_ROLE = "role"
STEP_EMAIL = "email"
STEP_PASSWORD = "password"
STEP_PASSWORD_CONFIRMATION = "password_confirmation"

# bcrypt only reads the first 72 bytes and newer releases reject anything longer.
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_password(password: str) -> None:
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(STEP_PASSWORD, f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


def require_fields(data: dict, fields: tuple[str, ...]) -> None:
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(STEP_REQUIRED_FIELDS, f"Missing required field: {field}")


def validate_registration(data: dict) -> None:
    require_fields(data, REGISTER_FIELDS)

    if data["role"] not in USER_ROLES:
        raise ValidationError(STEP_ROLE, "Role must be 'student' or 'teacher'")

    if not is_valid_email(normalize_email(data["email"])):
        raise ValidationError(STEP_EMAIL, "Invalid email address")

    if data["password"] != data["password_confirmation"]:
        raise ValidationError(STEP_PASSWORD_CONFIRMATION, "Passwords do not match")

    validate_password(data["password"])


def validate_login(data: dict) -> None:
    require_fields(data, LOGIN_FIELDS)

    if not is_valid_email(normalize_email(data["email"])):
        raise ValidationError(STEP_EMAIL, "Invalid email address")
