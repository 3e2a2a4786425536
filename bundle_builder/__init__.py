"""
Bundle Builder: Shopify bundle creation service
"""

__version__ = "1.0.0"
