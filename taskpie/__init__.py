"""taskpie - navigate a weighted task tree through an animated pie chart."""

__version__ = "0.1.0"
