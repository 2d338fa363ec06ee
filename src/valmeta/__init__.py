"""valmeta: client-side validation metadata from declarative field constraints."""

__version__ = "0.3.0"
