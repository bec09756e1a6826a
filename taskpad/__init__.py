"""taskpad: owner-scoped tasks and notes with a Telegram front end."""

__version__ = "0.1.0"
