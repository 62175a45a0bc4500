"""Shopping cart backend: user accounts, cart CRUD and checkout."""

__version__ = "1.0.0"
