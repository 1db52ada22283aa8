"""Errors raised by the checklist engine.

Each error is an HTTPException with its status code preset, so engine
functions can be called straight from route handlers and the error reaches
the client as a JSON detail message.
"""

from fastapi import HTTPException


class ChecklistError(HTTPException):
    """Base class for checklist engine errors."""

    default_status = 400

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=self.default_status, detail=detail)


class AutomationProtected(ChecklistError):
    """Manual write on an item whose automation signal owns it."""

    default_status = 409


class DuplicateSeed(ChecklistError):
    """A concurrent seed already inserted the same checklist items."""

    default_status = 409


class NotFound(ChecklistError):
    """Show or item does not exist, or belongs to another show."""

    default_status = 404


class ValidationError(ChecklistError):
    """Request data breaks a checklist rule."""

    default_status = 422
