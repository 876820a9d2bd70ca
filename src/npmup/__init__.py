"""npmup - update the dependencies listed in a package.json to their latest versions."""

__version__ = "0.1.0"
