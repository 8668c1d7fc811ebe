"""Check that the AWS credential environment is usable.

Reads AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY (plus the optional session
token and region variables) and prints a JSON report. With --verify the
credentials are also sent to STS GetCallerIdentity.
"""
from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging
import os

from yamlet_aws.config import ConfigError, load_settings
from yamlet_aws.credentials import CredentialsError
from yamlet_aws.preflight import check_credentials
from yamlet_aws.session import SessionError

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _default_log_level() -> str:
    level = os.environ.get("LOG_LEVEL", "").strip().upper()
    return level if level in LOG_LEVELS else "WARNING"


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check AWS credential environment variables.")
    parser.add_argument(
        "--fallback-region",
        default=None,
        help="Region used when AWS_REGION and AWS_DEFAULT_REGION are unset "
        "(default: YAMLET_FALLBACK_REGION or us-east-1)",
    )
    parser.add_argument(
        "--no-strict",
        action="store_true",
        help="Skip the empty/whitespace value check",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Call STS GetCallerIdentity with the resolved credentials",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=_default_log_level(),
        help="Logging level (default: LOG_LEVEL or WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level)

    try:
        settings = load_settings(fallback_region=args.fallback_region)
        if args.no_strict:
            settings = replace(settings, strict=False)
        report = check_credentials(settings=settings, verify=args.verify)
    except (ConfigError, CredentialsError, SessionError) as exc:
        raise SystemExit(f"error: {exc}") from exc

    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
