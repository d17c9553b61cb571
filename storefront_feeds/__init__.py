"""
Doofinder feed generator for Shopify Storefront content.
"""

__version__ = "1.0.0"
