"""Configuration defaults for tree layout, painting and logging."""

import os


class Config:
    """Package configuration."""

    # Presentation
    PAINT_METHOD = os.environ.get("ECOTREE_PAINT_METHOD", "normal")

    # Font metrics used by the bundled painters
    FONT_WIDTH = int(os.environ.get("ECOTREE_FONT_WIDTH", "7"))
    FONT_HEIGHT = int(os.environ.get("ECOTREE_FONT_HEIGHT", "12"))
    FONT_FAMILY = "Courier New"

    # Geometry
    X_MODIFIER = 1000
    STROKE = 1
    DEMARCATION_STROKE = 10
    DEMARCATION_PADDING = 10
    DEMARCATION_WIDTH = 20
    MIN_COLLAPSED_WIDTH = 0.01

    # Logging
    LOG_LEVEL = os.environ.get("ECOTREE_LOG_LEVEL", "INFO")
