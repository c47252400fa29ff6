"""GTM command center backend: skill registry and dispatch for the chat agent."""

__version__ = "0.1.0"
