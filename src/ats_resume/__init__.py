"""ATS-optimized resume generation from a profile and a job description."""

__version__ = "0.1.0"
