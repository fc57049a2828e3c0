"""fretchart — guitar chord diagrams rendered as inline SVG."""

__version__ = "0.1.0"
