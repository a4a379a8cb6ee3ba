# Outbound reply clients. LineMessenger is imported lazily by the app.

from .echo_dev_client import EchoMessenger

__all__ = ["EchoMessenger"]
