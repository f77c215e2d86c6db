"""
ahr999: Bitcoin AHR999 valuation index and DCA recommendation service.
"""

__version__ = "1.0.0"
