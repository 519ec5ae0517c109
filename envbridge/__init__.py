"""
envbridge

Configuration ingestion for long-running services: YAML configuration,
environment variable overrides and secret files reconciled into one
validated configuration tree.

Author: envbridge Project
License: MIT
"""

__version__ = "0.1.0"
