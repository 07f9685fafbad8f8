#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Exception hierarchy for lexitree.
Scanning never raises for input content; these cover configuration,
resource exhaustion and misuse of the node lifecycle.
"""


class LexitreeError(Exception):
    """Base class for every error raised by lexitree."""

    def __init__(self, message: str, line: int = 0, col: int = 0):
        self.message = message
        self.line = line
        self.col = col
        super().__init__(self._format())

    def _format(self) -> str:
        return (
            f"{self.line}:{self.col}: error: {self.message}"
            if self.line
            else f"error: {self.message}"
        )


class ConfigError(LexitreeError):
    """Raised for an invalid scanner configuration value or key."""

    pass


class ResourceExhaustedError(LexitreeError):
    """Raised when memory runs out while scanning or copying a tree."""

    pass


class NodeReleasedError(LexitreeError):
    """Raised when a released node is used or released a second time."""

    pass


class OwnershipError(LexitreeError):
    """Raised when a node that already has an owner is attached again."""

    pass
