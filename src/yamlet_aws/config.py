"""Runtime configuration for credential checks and local runs."""
from __future__ import annotations

from dataclasses import dataclass
import os
import re
from typing import Mapping

DEFAULT_FALLBACK_REGION = "us-east-1"

_REGION_PATTERN = re.compile(r"^[a-z]{2}(-[a-z]+)+-\d+$")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    fallback_region: str = DEFAULT_FALLBACK_REGION
    strict: bool = True


def _read_bool(value: str | None, name: str, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    cleaned = value.strip().lower()
    if cleaned in _TRUE_VALUES:
        return True
    if cleaned in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for environment variable {name}: {value!r}")


def validate_region(region: str) -> str:
    if not _REGION_PATTERN.match(region):
        raise ConfigError(f"Invalid region format: {region}")
    return region


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    fallback_region: str | None = None,
) -> Settings:
    """Load settings; an explicit ``fallback_region`` wins over the environment."""
    env = os.environ if environ is None else environ

    if fallback_region is None:
        fallback_region = (env.get("YAMLET_FALLBACK_REGION") or "").strip() or DEFAULT_FALLBACK_REGION
    validate_region(fallback_region)

    strict = _read_bool(env.get("YAMLET_STRICT_CREDENTIALS"), "YAMLET_STRICT_CREDENTIALS", True)

    return Settings(fallback_region=fallback_region, strict=strict)
