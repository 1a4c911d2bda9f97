from spiralprint.utils.math_helpers import clamp, lerp

__all__ = ["clamp", "lerp"]
