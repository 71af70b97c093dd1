"""Vehicle model, splines, track geometry, parameters and bounds for contouring control."""

__version__ = "0.1.0"