"""softascii

String and character types that carry a *soft* US-ASCII constraint: the
content is expected to be ASCII, checked on the checked construction paths,
but not re-checked on every mutation.  ``revalidate_soft_constraint()``
restores confidence after using an unchecked path.
"""

from softascii.domain.char import SoftAsciiChar
from softascii.domain.errors import FromSourceError, SoftAsciiError, StringFromStrError
from softascii.domain.string import SoftAsciiString
from softascii.domain.text import SoftAsciiStr

__all__ = [
    "FromSourceError",
    "SoftAsciiChar",
    "SoftAsciiError",
    "SoftAsciiStr",
    "SoftAsciiString",
    "StringFromStrError",
    "__version__",
]
__version__ = "1.0.0"
