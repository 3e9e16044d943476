from .bridge import PoseBridge, parse_poses

__all__ = ["PoseBridge", "parse_poses"]
