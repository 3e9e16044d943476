from .field import NoiseField

__all__ = ["NoiseField"]
