"""
Shared utilities.

Author: envbridge Project
License: MIT
"""
