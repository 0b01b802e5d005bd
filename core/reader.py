"""Base input reader abstraction"""
import abc


class InputReader(abc.ABC):
    """Source of key press/release event dicts for subscribers."""

    @abc.abstractmethod
    def start(self):
        raise NotImplementedError

    @abc.abstractmethod
    def stop(self):
        raise NotImplementedError

    @abc.abstractmethod
    def subscribe(self, callback):
        raise NotImplementedError
