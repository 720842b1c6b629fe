"""EmotiSense - emotion journaling with pattern insights."""

__version__ = "0.1.0"
