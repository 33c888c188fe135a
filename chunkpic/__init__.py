"""Building blocks for chunk-decomposed particle-in-cell simulations."""

__version__ = "0.1.0"

__all__ = [
    "argparser",
    "balancer",
    "buffer",
    "cfgparser",
    "chunkvector",
    "debug",
    "esirkepov",
    "interp",
    "mpibuffer",
    "utils",
]