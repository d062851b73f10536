"""
Almanac settings.

Command-line flags win; environment variables fill in what the flags leave
unset:

    ALMANAC_SOURCE        identifier space to start from (e.g. "seed")
    ALMANAC_DESTINATION   identifier space to end in (e.g. "location")
    ALMANAC_STRICT        "1"/"true"/"yes" refuses overlapping segments
    NO_COLOR              any value disables ANSI colors
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Optional


TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    source: Optional[str] = None
    destination: Optional[str] = None
    strict_overlaps: bool = False
    color: bool = True
    verbose: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            source=env.get("ALMANAC_SOURCE") or None,
            destination=env.get("ALMANAC_DESTINATION") or None,
            strict_overlaps=env.get("ALMANAC_STRICT", "").strip().lower() in TRUTHY,
            color="NO_COLOR" not in env,
        )

    @classmethod
    def from_args(
        cls,
        args: argparse.Namespace,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Settings:
        base = cls.from_env(environ)
        return cls(
            source=getattr(args, "source", None) or base.source,
            destination=getattr(args, "destination", None) or base.destination,
            strict_overlaps=getattr(args, "strict", False) or base.strict_overlaps,
            color=base.color and not getattr(args, "no_color", False),
            verbose=getattr(args, "verbose", False),
        )
