"""Client library and CLI for the OpenShift broker REST API."""

__version__ = "0.4.0"
