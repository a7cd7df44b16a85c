"""List open Gerrit changes for the current git checkout."""

__version__ = "0.1.0"
