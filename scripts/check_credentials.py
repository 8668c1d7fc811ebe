#!/usr/bin/env python3
"""Check that the AWS credential environment is usable.

See ``yamlet_aws.cli`` for the options; this script only runs it.
"""
from __future__ import annotations

from yamlet_aws.cli import main


if __name__ == "__main__":
    main()
