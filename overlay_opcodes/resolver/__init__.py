from .throttle import DiagnosticThrottle, DEFAULT_CEILING
from .resolver import OpcodeResolver

__all__ = ["DiagnosticThrottle", "DEFAULT_CEILING", "OpcodeResolver"]
