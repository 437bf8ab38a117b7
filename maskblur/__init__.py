"""
maskblur package
================

Locate a reference pattern (a "mask") in an image and blur the best
matching region.  The package follows a simple MVC layout:

- :mod:`maskblur.models` holds the matching, scoring and blurring code.
- :mod:`maskblur.controllers` runs the pipeline and the command line.
- :mod:`maskblur.views` writes images.
- :mod:`maskblur.utils` holds configuration, decoding and errors.
"""

__version__ = "1.0.0"

from . import models  # re-export models submodule

__all__ = ["models", "__version__"]
