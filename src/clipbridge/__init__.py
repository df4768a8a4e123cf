"""clipbridge: pipe text into or out of whichever clipboard the host has."""

__version__ = "0.1.0"
