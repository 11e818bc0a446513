"""gym-registry: gym registry and membership service with ledger payments."""

__version__ = "0.1.0"
