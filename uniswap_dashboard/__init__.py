"""Uniswap V3 subgraph dashboard."""

__version__ = "0.1.0"
