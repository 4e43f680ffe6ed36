from __future__ import annotations

"""
Build Profile Capability Selection.

Maps the kind of build a host application ships (full editor-like
environment, development build, release build) to the set of sinks
compiled into it. The result feeds ``RouterSettings.compiled``.
"""

import logging
import os
from enum import Enum
from typing import Optional

from logrouter.domain.constants import BUILD_PROFILE_ENV_VAR
from logrouter.domain.log_models import LoggingCapabilities

logger = logging.getLogger(__name__)


class BuildProfile(Enum):
    """Kinds of host builds that select a sink set."""

    EDITOR = "editor"
    DEVELOPMENT = "development"
    RELEASE = "release"


def capabilities_for_build(
        profile: BuildProfile,
        disable_file_in_release: bool = False,
) -> LoggingCapabilities:
    """
    Resolve the compiled-in sink set for a build profile.

    Editor builds carry every sink. Development builds drop the console
    sink. Release builds keep only the file sink, and drop it too when the
    persisted user preference asks for it.

    Args:
        profile: Target build profile.
        disable_file_in_release: Persisted preference for release builds.

    Returns:
        LoggingCapabilities: Sinks to compile in.
    """
    if profile is BuildProfile.EDITOR:
        return LoggingCapabilities(console=True, file=True, screen=True)
    if profile is BuildProfile.DEVELOPMENT:
        return LoggingCapabilities(console=False, file=True, screen=True)
    return LoggingCapabilities(console=False, file=not disable_file_in_release, screen=False)


def parse_build_profile(value: Optional[str], fallback: BuildProfile = BuildProfile.EDITOR) -> BuildProfile:
    """
    Convert a profile name (case-insensitive) into a BuildProfile.

    Unknown names fall back to ``fallback`` with a warning.
    """
    if not value:
        return fallback
    try:
        return BuildProfile(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Unknown build profile '{value}'. Falling back to '{fallback.value}'.")
        return fallback


def profile_from_env(fallback: BuildProfile = BuildProfile.EDITOR) -> BuildProfile:
    """Read the build profile from the ``LOGROUTER_BUILD_PROFILE`` variable."""
    return parse_build_profile(os.environ.get(BUILD_PROFILE_ENV_VAR), fallback)
