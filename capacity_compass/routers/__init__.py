from . import estimates, forecast

__all__ = ["estimates", "forecast"]
