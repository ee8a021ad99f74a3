class MetricError(RuntimeError):
    """Base class for failures while collecting a single metric."""


class SourceUnavailable(MetricError):
    """A pseudo-file or command could not be read or executed."""


class ParseFailure(MetricError):
    """Data was read but is not in the expected shape."""


class NotFound(MetricError):
    """An expected value is absent from otherwise valid data."""


class TemperatureNotFound(NotFound):
    """No known sensor label matched in the sensors output."""
