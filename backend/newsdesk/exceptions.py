"""Error types raised inside the aggregation pipeline."""


class NewsdeskError(Exception):
    """Base class for newsdesk errors."""


class ProviderError(NewsdeskError):
    """A news provider request failed or returned an unusable response."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class SummarizationError(NewsdeskError):
    """The summarization backend could not produce a completion."""


class AggregationError(NewsdeskError):
    """An aggregation cycle failed outside any per-item boundary."""


class AggregationInProgressError(AggregationError):
    """An aggregation cycle is already running."""
