# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by the Adder CLI framework.

These signals are raised to interrupt or redirect command execution
(e.g., displaying help or printing the version) without being treated
as traditional exceptions.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- HelpSignal: Render help for the resolved command instead of running it.
- VersionSignal: Print the program version instead of running the command.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Adder.

    These are not errors. They're used to short-circuit command execution
    when a built-in flag such as `--help` or `--version` is present.
    """


class HelpSignal(FlowSignal):
    """Raised to display help information."""

    def __init__(self, message: str = "Help signal received."):
        super().__init__(message)


class VersionSignal(FlowSignal):
    """Raised to display the program version."""

    def __init__(self, message: str = "Version signal received."):
        super().__init__(message)
