"""Run a MIPSpro tool and hide its license-check noise from stderr."""

__version__ = "0.1.0"
