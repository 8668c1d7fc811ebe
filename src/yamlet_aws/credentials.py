"""Resolve AWS credentials from environment variables."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import os
from typing import Any, Mapping

ACCESS_KEY_ID_VAR = "AWS_ACCESS_KEY_ID"
SECRET_ACCESS_KEY_VAR = "AWS_SECRET_ACCESS_KEY"
SESSION_TOKEN_VAR = "AWS_SESSION_TOKEN"
REGION_VAR = "AWS_REGION"
DEFAULT_REGION_VAR = "AWS_DEFAULT_REGION"


class CredentialsError(RuntimeError):
    """Base class for credential resolution and validation failures."""

    kind = "CredentialsError"
    env_vars: tuple[str, ...] = ()


class MissingCredentialsError(CredentialsError):
    """A required variable is absent from the environment."""


class MissingAccessKeyError(MissingCredentialsError):
    kind = "MissingAccessKey"
    env_vars = (ACCESS_KEY_ID_VAR,)

    def __init__(self) -> None:
        super().__init__(f"Missing {ACCESS_KEY_ID_VAR} environment variable")


class MissingSecretKeyError(MissingCredentialsError):
    kind = "MissingSecretKey"
    env_vars = (SECRET_ACCESS_KEY_VAR,)

    def __init__(self) -> None:
        super().__init__(f"Missing {SECRET_ACCESS_KEY_VAR} environment variable")


class MissingBothKeysError(MissingCredentialsError):
    kind = "MissingBothKeys"
    env_vars = (ACCESS_KEY_ID_VAR, SECRET_ACCESS_KEY_VAR)

    def __init__(self) -> None:
        super().__init__(
            f"Missing {ACCESS_KEY_ID_VAR} and {SECRET_ACCESS_KEY_VAR} environment variables"
        )


class InvalidCredentialsError(CredentialsError):
    """A required variable is set but its value is unusable."""


class EmptyAccessKeyError(InvalidCredentialsError):
    kind = "EmptyAccessKey"
    env_vars = (ACCESS_KEY_ID_VAR,)

    def __init__(self) -> None:
        super().__init__(f"{ACCESS_KEY_ID_VAR} cannot be empty")


class EmptySecretKeyError(InvalidCredentialsError):
    kind = "EmptySecretKey"
    env_vars = (SECRET_ACCESS_KEY_VAR,)

    def __init__(self) -> None:
        super().__init__(f"{SECRET_ACCESS_KEY_VAR} cannot be empty")


def _environ(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    # os.environ is looked up per call so changes made after import are seen.
    return os.environ if environ is None else environ


def _first_non_empty(*values: str | None) -> str | None:
    for value in values:
        if value:
            return value
    return None


@dataclass(frozen=True)
class CredentialBundle:
    access_key_id: str
    secret_access_key: str = field(repr=False)
    region: str = ""
    session_token: str | None = field(default=None, repr=False)

    @classmethod
    def from_env(
        cls,
        fallback_region: str = "",
        environ: Mapping[str, str] | None = None,
    ) -> "CredentialBundle":
        """Build a bundle from the environment as it is right now.

        Only presence is checked here. Whitespace-only values are accepted
        and left for :meth:`validate` to reject.
        """
        env = _environ(environ)
        access_key_id = env.get(ACCESS_KEY_ID_VAR)
        secret_access_key = env.get(SECRET_ACCESS_KEY_VAR)

        if access_key_id is None and secret_access_key is None:
            raise MissingBothKeysError()
        if access_key_id is None:
            raise MissingAccessKeyError()
        if secret_access_key is None:
            raise MissingSecretKeyError()

        return cls(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            region=resolve_region(fallback_region, environ=env),
            session_token=env.get(SESSION_TOKEN_VAR) or None,
        )

    @property
    def is_temporary(self) -> bool:
        return self.session_token is not None

    @property
    def masked_access_key_id(self) -> str:
        visible = self.access_key_id.strip()[-4:]
        return f"****{visible}" if visible else ""

    def validate(self) -> None:
        if not self.access_key_id.strip():
            raise EmptyAccessKeyError()
        if not self.secret_access_key.strip():
            raise EmptySecretKeyError()

    def with_region(self, region: str) -> "CredentialBundle":
        return replace(self, region=region)

    def to_boto3_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``boto3.session.Session``."""
        kwargs: dict[str, Any] = {
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
            "region_name": self.region or None,
        }
        if self.session_token is not None:
            kwargs["aws_session_token"] = self.session_token
        return kwargs


def resolve_from_environment(
    fallback_region: str = "",
    environ: Mapping[str, str] | None = None,
) -> CredentialBundle:
    return CredentialBundle.from_env(fallback_region, environ=environ)


def environment_variables_present(environ: Mapping[str, str] | None = None) -> bool:
    """Return True when both required variables are set, even if empty."""
    env = _environ(environ)
    return ACCESS_KEY_ID_VAR in env and SECRET_ACCESS_KEY_VAR in env


def resolve_region(fallback: str, environ: Mapping[str, str] | None = None) -> str:
    """Return AWS_REGION, then AWS_DEFAULT_REGION, then ``fallback``."""
    env = _environ(environ)
    return _first_non_empty(env.get(REGION_VAR), env.get(DEFAULT_REGION_VAR)) or fallback


def validate(bundle: CredentialBundle) -> None:
    bundle.validate()
