from spiralprint.printer.state import MotionParameters, MotionState, point3

__all__ = ["MotionParameters", "MotionState", "point3"]
