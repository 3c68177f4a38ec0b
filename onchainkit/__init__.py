"""Constant-product curve math, fixed-layout account views, and AMM and escrow instructions over in-memory accounts."""

__version__ = "0.1.0"