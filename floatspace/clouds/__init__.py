from .stamp import AlphaMask, CloudStampFactory
from .simulator import Cloud, CloudSimulator

__all__ = ["AlphaMask", "CloudStampFactory", "Cloud", "CloudSimulator"]
