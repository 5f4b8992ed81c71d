"""Interactive teaching simulations on a swappable, resource-safe runtime."""
__version__ = "0.1.0"
