"""Error taxonomy shared by checkers, the aggregator and the CLI."""


class A11ymError(Exception):
    """Base class for all a11ym errors."""


class ConfigurationError(A11ymError):
    """Invalid run options (unknown level, report format, options file...)."""


class FilterConfigurationError(ConfigurationError):
    """Malformed include/exclude code pattern."""


class AdapterError(A11ymError):
    """A single checker failed for one URL."""

    checker = "adapter"

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url

    def __str__(self) -> str:
        message = super().__str__()
        if self.url:
            return f"[{self.checker}] {self.url}: {message}"
        return f"[{self.checker}] {message}"


class ValidatorError(AdapterError):
    """The markup validator produced no usable report."""

    checker = "markup"


class EngineError(AdapterError):
    """The accessibility engine reported an error."""

    checker = "accessibility"


class AggregationFatalError(A11ymError):
    """Unexpected failure while running an aggregation episode."""

    def __init__(self, message: str, url: str | None = None, cause: BaseException | None = None):
        super().__init__(message)
        self.url = url
        self.cause = cause
