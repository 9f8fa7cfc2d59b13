"""Game state, rules, console helpers and AMQP pub/sub messaging for the Peril strategy game."""

__version__ = "0.1.0"