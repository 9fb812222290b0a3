"""bookflow: business-rule automation engine for a studio booking system."""

__version__ = "1.0.0"
