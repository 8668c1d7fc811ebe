"""Pre-flight check of the AWS credential environment."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from yamlet_aws.config import Settings, load_settings
from yamlet_aws.credentials import environment_variables_present, resolve_from_environment
from yamlet_aws.session import caller_identity

logger = logging.getLogger(__name__)


def check_credentials(
    *,
    settings: Settings | None = None,
    verify: bool = False,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Resolve, optionally validate and verify credentials, and report on them.

    The secret access key and session token never appear in the report or
    in log records.
    """
    settings = settings or load_settings(environ)

    if not environment_variables_present(environ):
        logger.warning("AWS credential environment variables are not fully set")

    bundle = resolve_from_environment(settings.fallback_region, environ=environ)
    if settings.strict:
        bundle.validate()

    report: dict[str, Any] = {
        "access_key_id": bundle.masked_access_key_id,
        "region": bundle.region,
        "temporary": bundle.is_temporary,
        "validated": settings.strict,
    }
    logger.info(
        "Resolved AWS credentials",
        extra={"access_key_id": bundle.masked_access_key_id, "region": bundle.region},
    )

    if verify:
        identity = caller_identity(bundle)
        report["identity"] = identity
        logger.info("Verified AWS credentials", extra={"account": identity["account"]})

    return report
