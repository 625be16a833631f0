"""Student record service: admits students and lists them, backed by MongoDB."""

__version__ = "1.0.0"
