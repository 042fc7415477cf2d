# ABOUTME: Portainer server version compatibility gate
# ABOUTME: Rejects server versions outside the range the tools were written against

"""
Portainer version compatibility check.

The API surface used by the tools changes between Portainer releases, so the
server refuses to start against a version it was not built for. The check
can be skipped with PORTAINER_MCP_DISABLE_VERSION_CHECK=true.

Versions follow semantic versioning:

    2.27.3        full version
    2.31.1-sts    pre-release suffix, ordered before 2.31.1
    2.30          shorthand for 2.30.0 (no suffix allowed)

Anything else ("v2.30.0", "2.30.0.1", "2.030.0") is rejected as malformed.

Supported range:
    minimum: 2.27.0 (inclusive, full version comparison)
    maximum: 2.36   (inclusive, major.minor only, so any 2.36.x patch passes)
"""

from __future__ import annotations

from semver import Version

MIN_SUPPORTED_PORTAINER_VERSION = "2.27.0"
MAX_SUPPORTED_PORTAINER_VERSION = "2.36"


class UnsupportedVersionError(Exception):
    """Portainer server version is malformed or outside the supported range."""


def parse_version(version: str) -> Version:
    """
    Parse a semantic version, allowing major or major.minor shorthand.

    Raises:
        ValueError: If the string is not a valid semantic version.
    """
    if Version.is_valid(version):
        return Version.parse(version)

    # Shorthand forms cannot carry pre-release or build suffixes
    parsed = Version.parse(version, optional_minor_and_patch=True)
    if parsed.prerelease or parsed.build:
        raise ValueError(f"{version} is not valid SemVer string")
    return parsed


def check_portainer_version(version: str) -> Version:
    """
    Validate a Portainer server version string.

    Args:
        version: Version reported by GET /api/system/version, e.g. "2.27.3"

    Returns:
        The parsed version.

    Raises:
        UnsupportedVersionError: If the version cannot be parsed or is outside
                                 the supported range.
    """
    try:
        parsed = parse_version(version)
    except (ValueError, TypeError) as e:
        raise UnsupportedVersionError(
            f"invalid Portainer server version format: {version}"
        ) from e

    if parsed < parse_version(MIN_SUPPORTED_PORTAINER_VERSION):
        raise UnsupportedVersionError(
            f"unsupported Portainer server version: {version}, "
            f"minimum supported version is {MIN_SUPPORTED_PORTAINER_VERSION}"
        )

    maximum = parse_version(MAX_SUPPORTED_PORTAINER_VERSION)
    if (parsed.major, parsed.minor) > (maximum.major, maximum.minor):
        raise UnsupportedVersionError(
            f"unsupported Portainer server version: {version}, "
            f"maximum supported version is {MAX_SUPPORTED_PORTAINER_VERSION}"
        )

    return parsed
