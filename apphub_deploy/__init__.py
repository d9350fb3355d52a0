"""Build, upload and clean up AppHub releases from the command line."""

__version__ = "0.3.0"
