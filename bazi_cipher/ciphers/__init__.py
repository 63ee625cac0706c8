"""Built-in ciphers. Import order is registration (and listing) order."""

from . import dot, reverse, caesar  # noqa: F401
