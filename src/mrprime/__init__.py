from . import csprng, primality
from .csprng import Csprng, UrandomSource
from .primality import Verdict, is_probable_prime, primality_test
from .primality.presets import presets
from .version import VERSION

__version__ = VERSION
