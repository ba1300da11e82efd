"""file_bundler: concatenate the source files of a directory tree into a single bundle."""

__version__ = "0.1.0"
