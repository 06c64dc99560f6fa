"""Code Alchemy: a desktop workspace of small developer tools."""

APP_NAME = "Code Alchemy"
__version__ = "0.1.0"

__all__ = ["APP_NAME", "__version__"]
