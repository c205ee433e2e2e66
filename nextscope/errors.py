"""Exception taxonomy for Nextscope.

Per-file failures (FileUnreadable, ParseFailure) are isolated by extractors
and surface as warnings. UnknownPlugin and TimeoutExceeded are converted to
failed results by the plugin manager. DuplicatePlugin is a programming error
raised at registration time.
"""


class NextscopeError(Exception):
    """Base class for all Nextscope errors."""


class FileUnreadable(NextscopeError):
    """A source file could not be stat'd or read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class ParseFailure(NextscopeError):
    """A source file could not be parsed into a syntax tree."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot parse {path}: {reason}")


class DuplicatePlugin(NextscopeError):
    """A plugin name was registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Plugin {name} is already registered")


class UnknownPlugin(NextscopeError):
    """No plugin is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Plugin {name} not found")


class TimeoutExceeded(NextscopeError):
    """A plugin execution ran past its time limit."""

    def __init__(self, name: str, timeout: float) -> None:
        self.name = name
        self.timeout = timeout
        super().__init__(f"Plugin {name} timed out after {timeout:g}s")
