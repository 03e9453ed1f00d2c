"""rolematch - role link to matched candidates dashboard."""

__version__ = "0.3.0"
