"""Error taxonomy shared by the dispatcher, filters and adapters."""


class TabctlError(Exception):
    """Base class for every error the CLI knows how to report."""


class UsageError(TabctlError):
    """Bad or missing command-line arguments."""


class InvalidAddress(UsageError):
    def __init__(self, value: str = ""):
        self.value = value
        super().__init__("Invalid window and tab index. Example: 0,13")


class AdapterUnavailable(TabctlError):
    """The browser could not be reached (not running, not authorized, timed out)."""


class NoMatches(TabctlError):
    """Nothing matched. Not a failure: the message is shown and the command exits 0."""
