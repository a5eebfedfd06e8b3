from __future__ import annotations


class AgentError(Exception):
    """Base class for agent failures."""


class UnknownStateError(AgentError, KeyError):
    """A state key was looked up before it was inserted into the value table."""

    def __init__(self, key: object) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"state was never observed: {self.key!r}"


class InvalidConfigError(AgentError, ValueError):
    pass


class ObservationOrderError(AgentError, RuntimeError):
    """The agent was asked to act or learn before it observed the environment."""
