from spiralprint.toolpath.spiral import (
    LayerPass,
    PathPoint,
    ShapeSpec,
    SpiralCylinderGenerator,
    blend_radius,
    blend_width,
    print_cylinder,
    spiral_radius,
)

__all__ = [
    "LayerPass",
    "PathPoint",
    "ShapeSpec",
    "SpiralCylinderGenerator",
    "blend_radius",
    "blend_width",
    "print_cylinder",
    "spiral_radius",
]
