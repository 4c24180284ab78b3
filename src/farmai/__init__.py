"""farmai - pluggable AI completion providers for the farm assistant."""

__version__ = "1.0.0"
