"""Battery reporter for the Logitech G935 wireless gaming headset."""

__version__ = "0.1.0"
