"""Custom exceptions"""


class AppError(Exception):
    """Base application error"""
    pass


class DropError(AppError):
    """Drag-and-drop target rejected before any request is sent"""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class InvalidTargetError(DropError):
    """Drop into a node that cannot hold children"""
    pass


class CyclicMoveError(DropError):
    """Drop would make a node its own ancestor"""
    pass


class NoParentError(DropError):
    """Sibling reorder requested without an addressable parent"""
    pass


class TargetNotFoundError(DropError):
    """Drop target is not among the parent's children"""
    pass
