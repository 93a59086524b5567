from .probe import (
    UNKNOWN_VERSION, VersionProbe, VersionId, is_unknown,
    StaticVersionProbe, GameVersionFileProbe, PeVersionProbe,
)

__all__ = [
    "UNKNOWN_VERSION", "VersionProbe", "VersionId", "is_unknown",
    "StaticVersionProbe", "GameVersionFileProbe", "PeVersionProbe",
]
