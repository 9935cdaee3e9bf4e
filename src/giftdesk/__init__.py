"""giftdesk: gift attribution for residents, with domain events published after commit."""

__version__ = "0.1.0"
