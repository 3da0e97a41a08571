"""Custom exceptions for input processing.

Precondition failures are raised before any traversal begins. They indicate
misuse (missing configuration, wrong feature set, wrong date window) rather
than a per-file runtime condition, so callers are expected to fix the
configuration and retry.
"""


class InputError(Exception):
    """Base exception for input processing precondition failures.

    All precondition errors inherit from this class, allowing callers
    to catch them with a single except clause if desired.
    """


class FeatureDisabledError(InputError):
    """Raised when the input feature is not enabled."""

    def __init__(self) -> None:
        super().__init__("Input feature is not enabled, skipping input processing")


class ConfigMissingError(InputError):
    """Raised when a required input setting is not configured.

    Attributes:
        setting: Name of the missing setting.
    """

    _MESSAGES = {
        "concurrency": "Concurrency is not configured",
        "input_directory": "Input directory is not configured",
    }

    def __init__(self, setting: str) -> None:
        """Initialize the exception.

        Args:
            setting: Name of the missing setting ("concurrency" or
                "input_directory").
        """
        self.setting = setting
        super().__init__(
            self._MESSAGES.get(setting, f"{setting} is not configured")
        )


class WindowRequiredError(InputError):
    """Raised when structured input is requested without a full date window."""

    def __init__(self) -> None:
        super().__init__("Start or end date are both required for structured input")


class WindowNotAllowedError(InputError):
    """Raised when a date window is supplied for unstructured input."""

    def __init__(self) -> None:
        super().__init__("Start or end date is not allowed for unstructured input")
