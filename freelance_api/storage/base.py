"""
Storage Interface Module

Storage is the persistence boundary of the API. Route handlers and services talk
to this interface only, so the SQL-backed store and the in-memory test double
are interchangeable.

Conventions shared by every implementation:

- Lists come back newest first (created_at, then id, descending).
- Narrow updates (update_project_status, mark_message_as_read) and
  create_client_account return None for an unknown id instead of raising.
- create_user raises DuplicateUsernameError for a taken username. Passwords
  arrive already hashed; storage never hashes or verifies them.
- create_client_with_project and create_client_account write both rows or neither.
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from freelance_api.models import (
    Client, Contact, Document, Message, Project, ProjectStatus, User,
)
from freelance_api.schemas.client import ClientProjectSubmission


class Storage(ABC):

    # === Users ===

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def create_user(self, user: User) -> User:
        """Persist a user whose password is already hashed.

        Raises:
            DuplicateUsernameError: If the username is taken
        """
        raise NotImplementedError

    # === Clients ===

    @abstractmethod
    def create_client_with_project(self, submission: ClientProjectSubmission) -> Tuple[Client, Project]:
        """Create a Client and its first, pending Project in one transaction.

        Raises:
            StorageError: If either write fails; nothing is persisted in that case
        """
        raise NotImplementedError

    @abstractmethod
    def get_clients(self) -> List[Client]:
        raise NotImplementedError

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        raise NotImplementedError

    @abstractmethod
    def get_client_by_user_id(self, user_id: int) -> Optional[Client]:
        raise NotImplementedError

    @abstractmethod
    def create_client_account(self, client_id: int, user: User) -> Optional[Tuple[User, Client]]:
        """Create a login for a client and link the client to it in one transaction.

        Returns None for an unknown client id.

        Raises:
            ConflictError: If the client is already linked to a user
            DuplicateUsernameError: If the username is taken
            StorageError: If either write fails; nothing is persisted in that case
        """
        raise NotImplementedError

    # === Projects ===

    @abstractmethod
    def get_projects(self) -> List[Project]:
        raise NotImplementedError

    @abstractmethod
    def get_project(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    @abstractmethod
    def get_projects_by_client(self, client_id: int) -> List[Project]:
        raise NotImplementedError

    @abstractmethod
    def update_project_status(self, project_id: int, status: ProjectStatus) -> Optional[Project]:
        raise NotImplementedError

    # === Contacts ===

    @abstractmethod
    def create_contact(self, contact: Contact) -> Contact:
        raise NotImplementedError

    @abstractmethod
    def get_contacts(self) -> List[Contact]:
        raise NotImplementedError

    # === Documents ===

    @abstractmethod
    def create_document(self, document: Document) -> Document:
        raise NotImplementedError

    @abstractmethod
    def get_document(self, document_id: int) -> Optional[Document]:
        raise NotImplementedError

    @abstractmethod
    def get_documents(self, project_ids: Optional[Iterable[int]] = None) -> List[Document]:
        """All documents, or only those of project_ids when given."""
        raise NotImplementedError

    @abstractmethod
    def get_documents_by_project(self, project_id: int) -> List[Document]:
        raise NotImplementedError

    # === Messages ===

    @abstractmethod
    def create_message(self, message: Message) -> Message:
        raise NotImplementedError

    @abstractmethod
    def get_message(self, message_id: int) -> Optional[Message]:
        raise NotImplementedError

    @abstractmethod
    def get_messages(self, project_ids: Optional[Iterable[int]] = None) -> List[Message]:
        """All messages, or only those of project_ids when given."""
        raise NotImplementedError

    @abstractmethod
    def get_messages_by_project(self, project_id: int) -> List[Message]:
        raise NotImplementedError

    @abstractmethod
    def mark_message_as_read(self, message_id: int) -> Optional[Message]:
        raise NotImplementedError
