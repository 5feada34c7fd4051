"""
snapmac - AppArmor profile management for confined snap applications
Loading, unloading and auditing of kernel MAC profiles
"""

from .config import AppArmorConfig, get_default_config, set_default_config, reset_default_config
from .exceptions import (
    SnapMACError, ProfileCommandError, ProfileLoadError, ProfileUnloadError,
    SourceUnavailableError, ProfileFormatError, ProfileSyntaxError,
    NewlineMismatchError, ConfigError
)
from .naming import (
    SNAP_PROFILE_PREFIX, AppIdentity, security_tag, hook_security_tag,
    snap_profile_prefix
)
from .runner import CommandResult, CommandRunner, SubprocessRunner
from .loader import ProfileLoader, load_profile, unload_profile
from .profiles import (
    Profile, parse_profile_line, parse_profiles, is_snap_profile,
    filter_snap_profiles, read_profiles_source, loaded_profiles,
    profiles_for_snap
)

__version__ = "1.0.0"

__all__ = [
    'AppArmorConfig', 'get_default_config', 'set_default_config',
    'reset_default_config',
    'SnapMACError', 'ProfileCommandError', 'ProfileLoadError',
    'ProfileUnloadError', 'SourceUnavailableError', 'ProfileFormatError',
    'ProfileSyntaxError', 'NewlineMismatchError', 'ConfigError',
    'SNAP_PROFILE_PREFIX', 'AppIdentity', 'security_tag', 'hook_security_tag',
    'snap_profile_prefix',
    'CommandResult', 'CommandRunner', 'SubprocessRunner',
    'ProfileLoader', 'load_profile', 'unload_profile',
    'Profile', 'parse_profile_line', 'parse_profiles', 'is_snap_profile',
    'filter_snap_profiles', 'read_profiles_source', 'loaded_profiles',
    'profiles_for_snap'
]
