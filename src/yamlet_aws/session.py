"""Hand resolved credentials to boto3."""
from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from yamlet_aws.credentials import CredentialBundle


class SessionError(RuntimeError):
    """Raised when AWS rejects or cannot be reached with the given credentials."""


def build_session(bundle: CredentialBundle) -> boto3.session.Session:
    return boto3.session.Session(**bundle.to_boto3_kwargs())


def client(service_name: str, bundle: CredentialBundle) -> Any:
    return build_session(bundle).client(service_name)


def caller_identity(bundle: CredentialBundle) -> dict[str, str]:
    """Ask STS who these credentials belong to."""
    try:
        response = client("sts", bundle).get_caller_identity()
    except (ClientError, BotoCoreError) as exc:
        raise SessionError(str(exc)) from exc

    return {
        "account": response.get("Account", ""),
        "arn": response.get("Arn", ""),
        "user_id": response.get("UserId", ""),
    }
