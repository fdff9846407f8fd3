"""nestlint model layer -- public type re-exports."""

from nestlint.model.diagnostic import Diagnostic, Severity
from nestlint.model.document import Document, Node, NodeKind, Position

__all__ = [
    # document
    "NodeKind",
    "Position",
    "Node",
    "Document",
    # diagnostic
    "Severity",
    "Diagnostic",
]
