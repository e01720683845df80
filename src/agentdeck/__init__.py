"""agentdeck: route coding tasks to specialised AI agent personas."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("agentdeck")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
