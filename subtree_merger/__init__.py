"""
subtree_merger package

Provides the CLI entrypoint (`python -m subtree_merger`) that drives git's
subtree merge workflow.
"""

__version__ = "0.1.0"

from .cli import main

__all__ = ["main", "__version__"]
