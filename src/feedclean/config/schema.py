"""Configuration schema models using Pydantic."""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from feedclean.utils.errors import InvalidConfigError

DEFAULT_DELETE_AGE_DAYS = 300


class Credentials(BaseModel):
    """FeedWrangler account credentials supplied on the command line."""

    model_config = ConfigDict(frozen=True)

    email: str
    password: SecretStr
    client_key: str

    @field_validator("email", "client_key", mode="before")
    @classmethod
    def _strip_required(cls, value: str | None, info: ValidationInfo) -> str:
        value = (value or "").strip()
        if not value:
            label = "Email" if info.field_name == "email" else "Client"
            raise ValueError(f"{label} argument is required")
        return value

    @field_validator("password", mode="before")
    @classmethod
    def _strip_password(cls, value: str | SecretStr | None) -> str:
        if isinstance(value, SecretStr):
            value = value.get_secret_value()
        value = (value or "").strip()
        if not value:
            raise ValueError("Password argument is required")
        return value


class CleanOptions(BaseModel):
    """Options for a single cleaning run."""

    model_config = ConfigDict(frozen=True)

    credentials: Credentials
    delete_age_days: int = Field(default=DEFAULT_DELETE_AGE_DAYS, ge=0)
    commit: bool = False  # False means dry run


def _format_validation_error(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        message = item["msg"]
        # pydantic prefixes messages raised from validators
        message = message.removeprefix("Value error, ")
        messages.append(message)
    return "; ".join(messages)


def build_credentials(email: str, password: str, client_key: str) -> Credentials:
    """Validate raw credential strings.

    Raises:
        InvalidConfigError: If any credential is empty after trimming
    """
    try:
        return Credentials(email=email, password=password, client_key=client_key)
    except ValidationError as e:
        raise InvalidConfigError(_format_validation_error(e)) from e


def build_options(
    email: str,
    password: str,
    client_key: str,
    delete_age_days: int = DEFAULT_DELETE_AGE_DAYS,
    commit: bool = False,
) -> CleanOptions:
    """Validate raw command-line inputs into CleanOptions.

    Args:
        email: Account email address
        password: Account password
        client_key: FeedWrangler developer client key
        delete_age_days: Look-back window in days
        commit: Whether deletions are actually performed

    Returns:
        Validated, immutable CleanOptions

    Raises:
        InvalidConfigError: If any input is missing or out of range
    """
    credentials = build_credentials(email, password, client_key)
    try:
        return CleanOptions(
            credentials=credentials,
            delete_age_days=delete_age_days,
            commit=commit,
        )
    except ValidationError as e:
        raise InvalidConfigError(_format_validation_error(e)) from e
