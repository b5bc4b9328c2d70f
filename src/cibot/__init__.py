"""cibot — configuration resolution for GitHub automation plugins and jobs."""

__version__ = "0.1.0"
