"""
lwcpreview — preview Lightning Web Components on desktop, iOS and Android.
"""

__version__ = "0.1.0"
