"""DemoPilot - call-to-action decisions for AI video-avatar product demos."""

__version__ = "0.1.0"
