"""
snapmac Loaded-Profile Reader

Reads the kernel's live profile listing (securityfs ``apparmor/profiles``)
and turns it into Profile records. Each line of the listing has the shape::

    <name> (<mode>)

where the name may contain spaces, slashes, wildcards and the ``//``
sub-profile separator. Parsing is all-or-nothing: one malformed line fails
the whole read.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .config import AppArmorConfig, get_default_config
from .exceptions import NewlineMismatchError, ProfileSyntaxError, SourceUnavailableError
from .loader import ProfileLoader
from .naming import SNAP_PROFILE_PREFIX, snap_profile_prefix

# Set up logging
logger = logging.getLogger('snapmac.profiles')


@dataclass(frozen=True)
class Profile:
    """A named profile as reported by the kernel"""
    name: str
    mode: str  # enforce, complain, ... reported verbatim

    def unload(self, loader: Optional[ProfileLoader] = None):
        """Remove this profile from the kernel"""
        (loader or ProfileLoader()).unload_profile(self.name)


def _has_mode_field(fields: List[str]) -> bool:
    return any('(' in field or ')' in field for field in fields)


def parse_profile_line(line: str, terminated: bool = True, lineno: Optional[int] = None) -> Profile:
    """
    Parse one line of the kernel profile listing

    Args:
        line: Line text without its newline
        terminated: Whether the line was followed by a newline
        lineno: Line number used in error reports

    Returns:
        Profile record

    Raises:
        NewlineMismatchError: If extra fields sit where the newline belongs
        ProfileSyntaxError: If the line is not 'name (mode)' followed by a newline
    """
    fields = line.split()
    if terminated and len(fields) > 2 and not _has_mode_field(fields):
        raise NewlineMismatchError(line, lineno)

    if not terminated or not line.endswith(')'):
        raise ProfileSyntaxError(line, lineno)

    sep = line.rfind(' (')
    if sep <= 0:
        raise ProfileSyntaxError(line, lineno)

    name = line[:sep]
    mode = line[sep + 2:-1]
    # exactly one space separates name and mode
    if not name.strip() or name[-1].isspace() or not mode or '(' in mode or ')' in mode:
        raise ProfileSyntaxError(line, lineno)

    return Profile(name, mode)


def parse_profiles(text: str) -> List[Profile]:
    """
    Parse the complete kernel profile listing

    Every well-formed line is returned, in order and without filtering.
    Empty input yields an empty list.
    """
    profiles = []
    lines = text.split('\n')
    last = len(lines)
    for lineno, line in enumerate(lines, 1):
        if not line:
            continue
        profiles.append(parse_profile_line(line, terminated=lineno < last, lineno=lineno))
    return profiles


def is_snap_profile(name: str) -> bool:
    """Check if a profile name belongs to a confined snap"""
    return name.startswith(SNAP_PROFILE_PREFIX)


def filter_snap_profiles(profiles: Iterable[Profile]) -> List[Profile]:
    """Keep only snap profiles, preserving order and duplicates"""
    return [profile for profile in profiles if is_snap_profile(profile.name)]


def read_profiles_source(path: str) -> str:
    """
    Read the kernel profile listing

    Raises:
        SourceUnavailableError: If the listing cannot be opened or read
    """
    try:
        with open(path, 'r', encoding='utf-8', errors='surrogateescape') as f:
            return f.read()
    except OSError as e:
        logger.error(f"Cannot read apparmor profiles from {path}: {e}")
        if e.errno is None:
            raise SourceUnavailableError(str(e)) from e
        raise SourceUnavailableError(e.errno, e.strerror, e.filename) from e


def loaded_profiles(config: Optional[AppArmorConfig] = None) -> List[Profile]:
    """
    List the snap profiles currently loaded into the kernel

    Args:
        config: Source of the profile listing path (process default when omitted)

    Returns:
        Profiles whose name starts with 'snap.', in kernel order

    Raises:
        SourceUnavailableError: If the listing cannot be read
        ProfileFormatError: If any line of the listing is malformed
    """
    config = config or get_default_config()
    profiles = parse_profiles(read_profiles_source(config.profiles_path))
    snap_profiles = filter_snap_profiles(profiles)
    logger.debug(f"Parsed {len(profiles)} profiles, {len(snap_profiles)} belong to snaps")
    return snap_profiles


def profiles_for_snap(snap_name: str, config: Optional[AppArmorConfig] = None) -> List[Profile]:
    """List the loaded profiles of a single snap"""
    prefix = snap_profile_prefix(snap_name)
    return [profile for profile in loaded_profiles(config) if profile.name.startswith(prefix)]
