"""DubSync — watch a video with a translated, synthesized soundtrack."""

__version__ = "0.1.0"
