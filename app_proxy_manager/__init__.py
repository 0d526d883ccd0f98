"""Azure App Proxy Manager - declarative Entra ID application reconciliation."""

__version__ = "1.0.0"
