"""Prime-field arithmetic, COPE and LPN correlations, LowMC, fixed-point floats and Kyber matrix generation."""

__version__ = "0.1.0"

__all__ = ["cope", "field", "floats", "genmatrix", "kyber", "lowmc", "lpn"]