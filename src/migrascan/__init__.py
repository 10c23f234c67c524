"""migrascan — find legacy payment-API usages that need migrating."""

__version__ = "0.1.0"
