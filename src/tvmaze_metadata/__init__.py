"""TVmaze metadata enrichment for TV episode, season and series entries."""

__version__ = "0.1.0"
