"""EduPlatform - course publishing, enrollment and lesson progress tracking."""

__version__ = "0.1.0"
