"""
In-memory implementation of the Storage interface.

Used as a test double and for running the API without a database. Ids come from
per-table counters, so they are only unique for the lifetime of the instance.
"""
from itertools import count
from typing import Dict, Iterable, List, Optional, Tuple, TypeVar

from sqlmodel import SQLModel

from freelance_api.core.errors import ConflictError, DuplicateUsernameError
from freelance_api.models import (
    Client, Contact, Document, Message, Project, ProjectStatus, User,
)
from freelance_api.schemas.client import ClientProjectSubmission
from freelance_api.storage.base import Storage

ModelT = TypeVar("ModelT", bound=SQLModel)


def _newest_first(rows: Iterable[ModelT]) -> List[ModelT]:
    return sorted(rows, key=lambda row: (row.created_at or "", row.id), reverse=True)


class MemoryStorage(Storage):

    def __init__(self):
        self.users: Dict[int, User] = {}
        self.clients: Dict[int, Client] = {}
        self.projects: Dict[int, Project] = {}
        self.contacts: Dict[int, Contact] = {}
        self.documents: Dict[int, Document] = {}
        self.messages: Dict[int, Message] = {}

        self._ids = {
            name: count(1)
            for name in ("users", "clients", "projects", "contacts", "documents", "messages")
        }

    def _insert(self, table: str, obj: ModelT) -> ModelT:
        obj.id = next(self._ids[table])
        getattr(self, table)[obj.id] = obj
        return obj

    # === Users ===

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((user for user in self.users.values() if user.username == username), None)

    def create_user(self, user: User) -> User:
        if self.get_user_by_username(user.username):
            raise DuplicateUsernameError()
        return self._insert("users", user)

    # === Clients ===

    def create_client_with_project(self, submission: ClientProjectSubmission) -> Tuple[Client, Project]:
        # Build both rows before inserting either so a failure leaves no orphan
        client = Client(**submission.client_fields())
        project = Project(status=ProjectStatus.PENDING, client_id=0, **submission.project_fields())

        self._insert("clients", client)
        project.client_id = client.id
        self._insert("projects", project)
        return client, project

    def get_clients(self) -> List[Client]:
        return _newest_first(self.clients.values())

    def get_client(self, client_id: int) -> Optional[Client]:
        return self.clients.get(client_id)

    def get_client_by_user_id(self, user_id: int) -> Optional[Client]:
        return next((client for client in self.clients.values() if client.user_id == user_id), None)

    def create_client_account(self, client_id: int, user: User) -> Optional[Tuple[User, Client]]:
        client = self.clients.get(client_id)
        if not client:
            return None
        # Check everything before writing so a rejected call changes nothing
        if client.user_id is not None:
            raise ConflictError("Client already has an account")

        self.create_user(user)
        client.user_id = user.id
        return user, client

    # === Projects ===

    def get_projects(self) -> List[Project]:
        return _newest_first(self.projects.values())

    def get_project(self, project_id: int) -> Optional[Project]:
        return self.projects.get(project_id)

    def get_projects_by_client(self, client_id: int) -> List[Project]:
        return _newest_first(p for p in self.projects.values() if p.client_id == client_id)

    def update_project_status(self, project_id: int, status: ProjectStatus) -> Optional[Project]:
        project = self.projects.get(project_id)
        if not project:
            return None
        project.status = ProjectStatus(status)
        return project

    # === Contacts ===

    def create_contact(self, contact: Contact) -> Contact:
        return self._insert("contacts", contact)

    def get_contacts(self) -> List[Contact]:
        return _newest_first(self.contacts.values())

    # === Documents ===

    def create_document(self, document: Document) -> Document:
        return self._insert("documents", document)

    def get_document(self, document_id: int) -> Optional[Document]:
        return self.documents.get(document_id)

    def get_documents(self, project_ids: Optional[Iterable[int]] = None) -> List[Document]:
        documents = self.documents.values()
        if project_ids is not None:
            wanted = set(project_ids)
            documents = [d for d in documents if d.project_id in wanted]
        return _newest_first(documents)

    def get_documents_by_project(self, project_id: int) -> List[Document]:
        return self.get_documents([project_id])

    # === Messages ===

    def create_message(self, message: Message) -> Message:
        return self._insert("messages", message)

    def get_message(self, message_id: int) -> Optional[Message]:
        return self.messages.get(message_id)

    def get_messages(self, project_ids: Optional[Iterable[int]] = None) -> List[Message]:
        messages = self.messages.values()
        if project_ids is not None:
            wanted = set(project_ids)
            messages = [m for m in messages if m.project_id in wanted]
        return _newest_first(messages)

    def get_messages_by_project(self, project_id: int) -> List[Message]:
        return self.get_messages([project_id])

    def mark_message_as_read(self, message_id: int) -> Optional[Message]:
        message = self.messages.get(message_id)
        if not message:
            return None
        message.is_read = True
        return message
