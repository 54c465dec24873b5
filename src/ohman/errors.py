from __future__ import annotations


class OhmanError(Exception):
    """Base class for errors that abort a run."""


class ConfigError(OhmanError):
    pass


class ScanError(OhmanError):
    def __init__(self, root: str, cause: OSError):
        super().__init__(f"error walking path {root}: {cause}")
        self.root = root
        self.cause = cause


class OutputError(OhmanError):
    def __init__(self, destination: str, cause: OSError):
        super().__init__(f"failed to write results to {destination}: {cause}")
        self.destination = destination
        self.cause = cause
