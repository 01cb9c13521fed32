"""Daily prayer completion tracking with a monthly calendar view."""

__version__ = "0.1.0"
