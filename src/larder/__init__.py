"""
Larder receipt-to-pantry matching package.

The package turns noisy receipt OCR text into candidate grocery line items and
reconciles them against the household pantry and shopping list.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
