"""EnglishAI - AI-generated English lessons with progress tracking."""

__version__ = "0.1.0"
