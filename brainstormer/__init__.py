"""Mini Brainstormer: three reels of concepts combined into one prompt."""

__app_name__ = "Mini Brainstormer"
__version__ = "0.3.0"
