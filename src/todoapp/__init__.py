"""todoapp — Todo list domain core with validation and policy engines."""

__version__ = "0.1.0"
