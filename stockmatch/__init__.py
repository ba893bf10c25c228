"""StockMatch: match unfulfilled vehicle orders against available stock."""

__version__ = "0.1.0"
