"""Supply-chain trust scoring for third-party packages."""

__version__ = "0.1.0"
