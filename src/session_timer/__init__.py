"""Session timer: continuous and Pomodoro session tracking with a live display."""

__version__ = "0.1.0"
