"""cluster-shell: an interactive shell for browsing a live Kubernetes cluster."""

from cluster_shell.__version__ import __version__

__all__ = ["__version__"]
