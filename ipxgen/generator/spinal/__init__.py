"""
SpinalHDL generators: native bus translations and the BlackBox emitter.
"""

from .emitter import ScalaField, ScalaUnit, SpinalEmitter
from .native import GenericVectorAbstraction, NativeAxiMMAbstraction, NativeAxisAbstraction
from .native_library import (
    NativeBusLibrary,
    apply_native_overrides,
    get_native_bus_library,
    native_overrides,
)

__all__ = [
    "SpinalEmitter",
    "ScalaUnit",
    "ScalaField",
    "NativeAxiMMAbstraction",
    "NativeAxisAbstraction",
    "GenericVectorAbstraction",
    "NativeBusLibrary",
    "get_native_bus_library",
    "native_overrides",
    "apply_native_overrides",
]
