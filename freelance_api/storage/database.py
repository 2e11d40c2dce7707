"""
Database Storage Module

SQLModel implementation of the Storage interface. One instance wraps the
request's database session; identifiers are generated by the database.
"""
import logging
from typing import Iterable, List, Optional, Tuple, TypeVar

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from freelance_api.core.errors import ConflictError, DuplicateUsernameError, StorageError
from freelance_api.models import (
    Client, Contact, Document, Message, Project, ProjectStatus, User,
)
from freelance_api.schemas.client import ClientProjectSubmission
from freelance_api.storage.base import Storage

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class DatabaseStorage(Storage):

    def __init__(self, db: Session):
        self.db = db

    def _save(self, obj: ModelT) -> ModelT:
        """Add obj, commit and refresh it. Rolls back and raises StorageError on failure."""
        try:
            self.db.add(obj)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to save %s: %s", type(obj).__name__, exc)
            raise StorageError(f"Could not save {type(obj).__name__.lower()}") from exc
        self.db.refresh(obj)
        return obj

    # === Users ===

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.exec(select(User).where(User.username == username)).first()

    def create_user(self, user: User) -> User:
        if self.get_user_by_username(user.username):
            raise DuplicateUsernameError()

        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent insert of the same username
            self.db.rollback()
            raise DuplicateUsernameError() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to create user %s: %s", user.username, exc)
            raise StorageError("Could not save user") from exc
        self.db.refresh(user)
        return user

    # === Clients ===

    def create_client_with_project(self, submission: ClientProjectSubmission) -> Tuple[Client, Project]:
        client = Client(**submission.client_fields())
        try:
            self.db.add(client)
            # Flush assigns client.id without committing the transaction
            self.db.flush()

            project = Project(
                client_id=client.id,
                status=ProjectStatus.PENDING,
                **submission.project_fields(),
            )
            self.db.add(project)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to save onboarding submission from %s: %s", submission.email, exc)
            raise StorageError("Could not save client submission") from exc

        self.db.refresh(client)
        self.db.refresh(project)
        return client, project

    def get_clients(self) -> List[Client]:
        statement = select(Client).order_by(Client.created_at.desc(), Client.id.desc())
        return list(self.db.exec(statement).all())

    def get_client(self, client_id: int) -> Optional[Client]:
        return self.db.get(Client, client_id)

    def get_client_by_user_id(self, user_id: int) -> Optional[Client]:
        return self.db.exec(select(Client).where(Client.user_id == user_id)).first()

    def create_client_account(self, client_id: int, user: User) -> Optional[Tuple[User, Client]]:
        client = self.db.get(Client, client_id)
        if not client:
            return None
        if client.user_id is not None:
            raise ConflictError("Client already has an account")
        if self.get_user_by_username(user.username):
            raise DuplicateUsernameError()

        try:
            self.db.add(user)
            # Flush assigns user.id without committing the transaction
            self.db.flush()

            # Only an unlinked client may be claimed; a concurrent claim leaves zero rows matched
            result = self.db.execute(
                update(Client)
                .where(Client.id == client_id, Client.user_id.is_(None))
                .values(user_id=user.id)
            )
            if result.rowcount != 1:
                self.db.rollback()
                raise ConflictError("Client already has an account")
            self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent insert of the same username
            self.db.rollback()
            raise DuplicateUsernameError() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to create account %s for client %s: %s", user.username, client_id, exc)
            raise StorageError("Could not create client account") from exc

        self.db.refresh(user)
        self.db.refresh(client)
        return user, client

    # === Projects ===

    def get_projects(self) -> List[Project]:
        statement = select(Project).order_by(Project.created_at.desc(), Project.id.desc())
        return list(self.db.exec(statement).all())

    def get_project(self, project_id: int) -> Optional[Project]:
        return self.db.get(Project, project_id)

    def get_projects_by_client(self, client_id: int) -> List[Project]:
        statement = (
            select(Project)
            .where(Project.client_id == client_id)
            .order_by(Project.created_at.desc(), Project.id.desc())
        )
        return list(self.db.exec(statement).all())

    def update_project_status(self, project_id: int, status: ProjectStatus) -> Optional[Project]:
        project = self.db.get(Project, project_id)
        if not project:
            return None

        project.status = ProjectStatus(status)
        return self._save(project)

    # === Contacts ===

    def create_contact(self, contact: Contact) -> Contact:
        return self._save(contact)

    def get_contacts(self) -> List[Contact]:
        statement = select(Contact).order_by(Contact.created_at.desc(), Contact.id.desc())
        return list(self.db.exec(statement).all())

    # === Documents ===

    def create_document(self, document: Document) -> Document:
        return self._save(document)

    def get_document(self, document_id: int) -> Optional[Document]:
        return self.db.get(Document, document_id)

    def get_documents(self, project_ids: Optional[Iterable[int]] = None) -> List[Document]:
        statement = select(Document)
        if project_ids is not None:
            project_ids = list(project_ids)
            if not project_ids:
                return []
            statement = statement.where(Document.project_id.in_(project_ids))
        statement = statement.order_by(Document.created_at.desc(), Document.id.desc())
        return list(self.db.exec(statement).all())

    def get_documents_by_project(self, project_id: int) -> List[Document]:
        return self.get_documents([project_id])

    # === Messages ===

    def create_message(self, message: Message) -> Message:
        return self._save(message)

    def get_message(self, message_id: int) -> Optional[Message]:
        return self.db.get(Message, message_id)

    def get_messages(self, project_ids: Optional[Iterable[int]] = None) -> List[Message]:
        statement = select(Message)
        if project_ids is not None:
            project_ids = list(project_ids)
            if not project_ids:
                return []
            statement = statement.where(Message.project_id.in_(project_ids))
        statement = statement.order_by(Message.created_at.desc(), Message.id.desc())
        return list(self.db.exec(statement).all())

    def get_messages_by_project(self, project_id: int) -> List[Message]:
        return self.get_messages([project_id])

    def mark_message_as_read(self, message_id: int) -> Optional[Message]:
        message = self.db.get(Message, message_id)
        if not message:
            return None
        if message.is_read:
            return message

        message.is_read = True
        return self._save(message)
