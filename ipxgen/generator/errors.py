"""Exceptions raised while generating SpinalHDL code."""

from typing import Optional

from ipxgen.model.base import VLNV


class GenerationError(Exception):
    """Error while producing code for a bus interface or instance."""

    def __init__(self, message: str, vlnv: Optional[VLNV] = None):
        self.vlnv = vlnv
        super().__init__(f"{vlnv}: {message}" if vlnv else message)


class UnsupportedFeatureError(GenerationError):
    """The configuration asks for a protocol or feature with no safe translation.

    Always propagated; the emitter never downgrades it to a skipped interface.
    """


class MissingConfigurationError(GenerationError):
    """A mandatory configuration key is absent."""
