"""Error taxonomy for the analysis pipeline.

Every error carries a one-line message suitable for showing to the user.
"""


class AnalysisError(Exception):
    """Base for every failure the pipeline reports to the user."""


class DecodeError(AnalysisError):
    """The input image could not be decoded."""


class ValidationError(AnalysisError):
    """The request is empty or malformed."""


class ConfigurationError(AnalysisError):
    """A required credential or setting is missing."""


class BackendError(AnalysisError):
    """The model provider failed, timed out or returned nothing."""


class ParseError(AnalysisError):
    """The model response is not the expected JSON document."""


class StateTransitionError(RuntimeError):
    """An analysis session was driven through an illegal transition."""
