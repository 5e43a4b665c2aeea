"""scrypt-cli: scaffold sCrypt smart-contract projects."""

__version__ = "0.1.0"
