"""
Profile names for confined snap applications.

Every application of a snap runs under its own AppArmor profile whose name is
the application's security tag: ``snap.<snap>.<app>``.
"""

from typing import NamedTuple

# Prefix shared by the profiles of every confined snap
SNAP_PROFILE_PREFIX = "snap."


def security_tag(snap_name: str, app_name: str) -> str:
    """Return the profile name of application app_name in snap snap_name"""
    return f"{SNAP_PROFILE_PREFIX}{snap_name}.{app_name}"


def hook_security_tag(snap_name: str, hook_name: str) -> str:
    """Return the profile name of hook hook_name in snap snap_name"""
    return f"{SNAP_PROFILE_PREFIX}{snap_name}.hook.{hook_name}"


def snap_profile_prefix(snap_name: str) -> str:
    """Return the prefix shared by every profile belonging to snap_name"""
    return f"{SNAP_PROFILE_PREFIX}{snap_name}."


class AppIdentity(NamedTuple):
    """Identity of a confined application"""
    snap_name: str
    app_name: str

    @property
    def security_tag(self) -> str:
        return security_tag(self.snap_name, self.app_name)
