from .user import User, UserRole
from .client import Client
from .project import Project, ProjectStatus
from .document import Document
from .message import Message
from .contact import Contact

__all__ = [
    "User", "UserRole",
    "Client",
    "Project", "ProjectStatus",
    "Document",
    "Message",
    "Contact",
]
