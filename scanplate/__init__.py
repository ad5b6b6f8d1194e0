"""ScanPlate cart engine: configured items, pricing, persistence and checkout."""

__version__ = "0.1.0"
