"""Core module - domain models and observability.

This module contains the CMMS entity models and the logging/metrics stack.
It is intentionally transport-agnostic.

Gateway HTTP logic (auth, requests, domain namespaces) belongs in /gateway/.
"""

__version__ = "1.0.0"
