"""Exception hierarchy for batch generation runs.

Configuration errors are fatal and abort the run. Statistical validity and
per-batch sampling errors are reported and the run moves on to the next batch.
"""


class DynBatchError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(DynBatchError):
    """Invalid run configuration. Always fatal."""

    def __init__(self, message: str, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class UnknownInputFormat(ConfigurationError):
    """Raised when the input format string names no known loader."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown input format: {value!r}", value)


class UnknownInputTransform(ConfigurationError):
    """Raised when a transform name is not recognised."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown input transform: {value!r}", value)


class UnknownUpdateNature(ConfigurationError):
    """Raised when the update nature names no sampling policy."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown update nature: {value!r}", value)


class UnknownProbabilityDistribution(ConfigurationError):
    """Raised when the custom sampler is asked for an unknown family."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown probability distribution: {value!r}", value)


class UnknownOutputFormat(ConfigurationError):
    """Raised when the output format string names no known writer."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown output format: {value!r}", value)


class InputFileNotFound(ConfigurationError):
    """Raised when the input graph file is missing or unreadable."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Input graph file not found: {path}", path)


class OutputFileCreateFailed(ConfigurationError):
    """Raised when a batch snapshot file cannot be created."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Failed to create file: {path}", path)


class StatisticalValidityError(DynBatchError):
    """A statistic is undefined for the given inputs. Recoverable."""


class ZeroSupportMismatch(StatisticalValidityError):
    """KL divergence is undefined: the reference has mass where the other has none."""

    def __init__(self, index: int, p_value: float) -> None:
        super().__init__(
            f"Q[{index}] must be non-zero where P[{index}] = {p_value:.6g} is non-zero"
        )
        self.index = index
        self.p_value = p_value


class SamplingError(DynBatchError):
    """The sampler could not produce a batch. Recoverable per batch."""


class BatchApplicationError(DynBatchError):
    """A batch was rejected before any mutation took place."""
