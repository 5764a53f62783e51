from .csprng import Csprng, SecureRandomSource, UrandomSource

__all__ = ["Csprng", "SecureRandomSource", "UrandomSource"]
