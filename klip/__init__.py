"""SHA-256, SHA-512, HMAC, PBKDF2, scrypt and Ed25519 primitives in plain Python."""

__version__ = "0.1.0"