__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'argot'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

import sys

from .arguments import *
from .faults import *
from .grammar import *
from .help import *
from .parser import *
from .results import *
from .utils import Unset

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


def invoke(syntax, argv=Unset, /, *, console=Unset, errors=Unset, colorful=False, diagnose=False):
    """
    Convenience runner: parse argv against syntax, or print help and exit.

    Parameters
    - syntax: Syntax describing the tool.
    - argv:
      • Unset: read sys.argv.
      • str: split with shlex.split (program token included).
      • Iterable[str]: use items as tokens.
    - console / errors / colorful / diagnose: forwarded to Help.

    Returns
    - ParseResult of a valid invocation.

    Raises
    - SystemExit carrying the help disposition when the invocation is not valid
      (including explicit help and version requests).
    """
    arguments = Arguments(argv)
    parser = Parser(syntax, arguments)
    if parser.parse():
        return parser.result

    help = Help(syntax, parser, arguments, console=console, errors=errors, colorful=colorful, diagnose=diagnose)
    sys.exit(help.run())


__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info",
    "invoke",
)

# Load the exposed API of the arguments
__all__ += arguments.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the grammar
__all__ += grammar.__all__  # type: ignore[attr-defined]
# Load the exposed API of the help renderer
__all__ += help.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parser
__all__ += parser.__all__  # type: ignore[attr-defined]
# Load the exposed API of the results
__all__ += results.__all__  # type: ignore[attr-defined]
