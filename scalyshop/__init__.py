"""ScalyShop backend: product catalogue, favorites and shop instrumentation."""

__version__ = "2.0.0"
