class SnapMACError(Exception):
    """Base exception for snapmac"""
    pass

# Loader helper related exceptions
class ProfileCommandError(SnapMACError):
    """Raised when the apparmor_parser helper fails to start or exits non-zero"""

    action = "run apparmor_parser for"

    def __init__(self, cause: str, output: str = "", returncode=None):
        self.cause = cause
        self.output = output
        self.returncode = returncode
        super().__init__(
            f"cannot {self.action} apparmor profile: {cause}\n"
            f"apparmor_parser output:\n{output}"
        )

class ProfileLoadError(ProfileCommandError):
    """Raised when a compiled profile cannot be loaded into the kernel"""
    action = "load"

class ProfileUnloadError(ProfileCommandError):
    """Raised when a profile cannot be removed from the kernel"""
    action = "unload"

# Kernel profile listing related exceptions
class SourceUnavailableError(SnapMACError, OSError):
    """Raised when the kernel profile listing cannot be opened or read"""
    pass

class ProfileFormatError(SnapMACError):
    """Base exception for malformed kernel profile listings"""
    message = "malformed profile listing"

    def __init__(self, line: str = None, lineno: int = None):
        self.line = line
        self.lineno = lineno
        super().__init__(self.message)

class ProfileSyntaxError(ProfileFormatError):
    """Raised when a line does not have the shape 'name (mode)'"""
    message = "syntax error, expected: name (mode)"

class NewlineMismatchError(ProfileFormatError):
    """Raised when content is found where the line terminator was expected"""
    message = "newline in format does not match input"

# Configuration related exceptions
class ConfigError(SnapMACError):
    """Raised when configuration is invalid or cannot be read"""
    pass
