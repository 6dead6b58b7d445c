"""Exceptions raised by nodesweep."""


class NodesweepError(Exception):
    """Base class for nodesweep errors."""


class CommandError(NodesweepError):
    """A host command (open folder, list drives) could not be carried out."""


class ConfigError(NodesweepError):
    """The configuration file could not be read or is invalid."""
