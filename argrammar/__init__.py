__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'argrammar'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .arguments import *
from .builders import *
from .configs import *
from .faults import *
from .grammar import *
from .parsers import *
from .scanner import *
from .usage import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

__all__ += arguments.__all__  # type: ignore[attr-defined]
__all__ += builders.__all__  # type: ignore[attr-defined]
__all__ += configs.__all__  # type: ignore[attr-defined]
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += grammar.__all__  # type: ignore[attr-defined]
__all__ += parsers.__all__  # type: ignore[attr-defined]
__all__ += scanner.__all__  # type: ignore[attr-defined]
__all__ += usage.__all__  # type: ignore[attr-defined]
