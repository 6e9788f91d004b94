"""
CLI layer for oraspine.

Terminal transport only: argument parsing, coloured output and table
formatting.  All database work goes through ``oraspine.oci.Connection``.

Entry point::

    oraspine --help
"""

from oraspine.cli.app import app

__all__ = ["app"]
