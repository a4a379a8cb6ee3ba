# Exceptions raised at the plumbing boundaries (store, messenger, config).
# The search core itself never raises for bad input.


class BotError(Exception):
    """Base class for errors the orchestrator knows how to recover from."""


class StoreUnavailableError(BotError):
    """The entry store could not be read (network, credentials, bad file)."""


class DeliveryError(BotError):
    """The messaging platform rejected an outbound reply."""


class ConfigurationError(BotError):
    """Required settings are missing or inconsistent."""
