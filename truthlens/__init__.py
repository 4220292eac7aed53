"""TruthLens: credibility-scored news feed and claim verification over Gemini."""

__version__ = "0.1.0"
