"""
snapmac Profile Loader

This module installs compiled AppArmor profiles into the running kernel and
removes them again by driving the apparmor_parser helper. The helper's exit
status and combined output are preserved in the raised errors since they are
the main diagnostic for confinement failures.
"""

import logging
from typing import Iterable, List, Optional

from .config import AppArmorConfig, get_default_config
from .exceptions import ProfileCommandError, ProfileLoadError, ProfileUnloadError
from .runner import CommandResult, CommandRunner, SubprocessRunner

# Set up logging
logger = logging.getLogger('snapmac.loader')


class ProfileLoader:
    """Loads and unloads AppArmor profiles through apparmor_parser"""

    def __init__(self, config: Optional[AppArmorConfig] = None,
                 runner: Optional[CommandRunner] = None):
        """
        Initialize the loader

        Args:
            config: Helper command and cache location (process default when omitted)
            runner: Command runner (a SubprocessRunner when omitted)
        """
        self.config = config or get_default_config()
        self.runner = runner or SubprocessRunner()

    def load_args(self, path: str) -> List[str]:
        """Arguments that load or replace the compiled profile at path"""
        return [
            "--replace",
            "--write-cache",
            "-O", "no-expr-simplify",
            f"--cache-loc={self.config.cache_dir}",
            path,
        ]

    def unload_args(self, name: str) -> List[str]:
        """Arguments that remove the profile called name"""
        return ["--remove", name]

    def load_profile(self, path: str):
        """
        Load or replace a compiled profile in the kernel

        Args:
            path: Filesystem path of the profile

        Raises:
            ProfileLoadError: If apparmor_parser fails to start or exits non-zero
        """
        result = self._run(self.load_args(path))
        self._check(result, ProfileLoadError)
        logger.info(f"Loaded apparmor profile {path}")

    def unload_profile(self, name: str):
        """
        Remove a loaded profile from the kernel

        Args:
            name: Profile name, e.g. snap.foo.bar

        Raises:
            ProfileUnloadError: If apparmor_parser fails to start or exits non-zero
        """
        result = self._run(self.unload_args(name))
        self._check(result, ProfileUnloadError)
        logger.info(f"Unloaded apparmor profile {name}")

    def load_profiles(self, paths: Iterable[str]):
        """Load several profiles in order, stopping at the first failure"""
        for path in paths:
            self.load_profile(path)

    def unload_profiles(self, names: Iterable[str]):
        """Unload several profiles in order, stopping at the first failure"""
        for name in names:
            self.unload_profile(name)

    def _run(self, args: List[str]) -> CommandResult:
        argv = [self.config.parser_command] + args
        logger.debug(f"Invoking {' '.join(argv)}")
        return self.runner.run(argv)

    def _check(self, result: CommandResult, error_class: type):
        if result.ok:
            return
        error: ProfileCommandError = error_class(result.error, result.output, result.returncode)
        logger.error(str(error))
        raise error


def load_profile(path: str, config: Optional[AppArmorConfig] = None):
    """Load a compiled profile using the process default loader settings"""
    ProfileLoader(config).load_profile(path)


def unload_profile(name: str, config: Optional[AppArmorConfig] = None):
    """Unload a profile by name using the process default loader settings"""
    ProfileLoader(config).unload_profile(name)
