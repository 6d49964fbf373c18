"""ARGUS TV live TV backend adapter."""

from arguslive.config import VERSION

__version__ = VERSION
