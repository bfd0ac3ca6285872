"""Diagnostics sink shared by every pipeline stage."""

from abc import ABC, abstractmethod

from .utils.console import _rich_info, _rich_warning, _rich_error


class Messager(ABC):
    """Reports build messages to the user; implementations must never raise."""

    @abstractmethod
    def report_info(self, message: str) -> None:
        """Report an informational message."""
        pass

    @abstractmethod
    def report_warning(self, message: str) -> None:
        """Report a problem that does not stop the build."""
        pass

    @abstractmethod
    def report_error(self, message: str) -> None:
        """Report a problem that fails the build."""
        pass


class ConsoleMessager(Messager):
    """Messager printing to the terminal through the rich console helpers."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def report_info(self, message: str) -> None:
        if self.verbose:
            _rich_info(message, symbol="info")

    def report_warning(self, message: str) -> None:
        _rich_warning(message, symbol="warning")

    def report_error(self, message: str) -> None:
        _rich_error(message, symbol="error")
