"""SQLAlchemy-backed persistent store of classes and students."""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
    create_engine,
    event,
    func,
    select,
)
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from scv.models import Classroom, Student

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreError(RuntimeError):
    """Raised when the persistent store cannot complete an operation."""


class DuplicateClassError(StoreError):
    """Raised when creating a class whose name is already taken."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def _aware(value: datetime) -> datetime:
    # SQLite drops the offset on the way back out.
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class Base(DeclarativeBase):
    pass


class ClassRow(Base):
    __tablename__ = "classes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def to_model(self) -> Classroom:
        return Classroom(id=self.id, name=self.name, created_at=_aware(self.created_at))


class StudentRow(Base):
    __tablename__ = "students"
    __table_args__ = (
        UniqueConstraint("class_id", "username", name="uq_students_class_username"),
        Index("idx_students_class_id", "class_id"),
        Index("idx_students_username", "username"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    class_id: Mapped[int] = mapped_column(
        ForeignKey("classes.id", ondelete="CASCADE"), nullable=False,
    )
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    github_username: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def to_model(self) -> Student:
        return Student(
            id=self.id,
            class_id=self.class_id,
            username=self.username,
            github_username=self.github_username,
            created_at=_aware(self.created_at),
        )


class SqlStore:
    """Class/student storage on a local SQLite database.

    Every public operation is a coroutine; the blocking database work runs
    on a worker thread so the caller's event loop only suspends.
    """

    def __init__(self, database_path: Path | None = None, *, url: str | None = None) -> None:
        if url is None:
            if database_path is None:
                msg = "either database_path or url is required"
                raise ValueError(msg)
            url = f"sqlite:///{database_path.as_posix()}"
        self.url = url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    # ── Lifecycle ────────────────────────────────────────────
    def open(self) -> None:
        """Create the engine and the tables if they don't exist."""
        engine = create_engine(
            self.url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False, "timeout": 30.0},
        )

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _record: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        try:
            Base.metadata.create_all(engine)
        except SQLAlchemyError as exc:
            engine.dispose()
            msg = f"could not open database at {self.url}: {exc}"
            raise StoreError(msg) from exc

        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        logger.info("Opened store at %s", self.url)

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    @contextmanager
    def _session(self) -> Iterator[Session]:
        if self._session_factory is None:
            msg = "store is not open"
            raise StoreError(msg)
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    async def _run(self, fn: Callable[..., T], *args: Any) -> T:
        try:
            return await asyncio.to_thread(fn, *args)
        except StoreError:
            raise
        except SQLAlchemyError as exc:
            logger.warning("Store operation %s failed: %s", fn.__name__, exc)
            raise StoreError(str(exc)) from exc

    # ── Classes ──────────────────────────────────────────────
    async def create_class(self, name: str) -> Classroom:
        return await self._run(self._create_class, name)

    def _create_class(self, name: str) -> Classroom:
        try:
            with self._session() as session:
                row = ClassRow(name=name)
                session.add(row)
                session.flush()
                return row.to_model()
        except IntegrityError:
            msg = f"A class named '{name}' already exists"
            raise DuplicateClassError(msg) from None

    async def list_classes(self) -> list[Classroom]:
        return await self._run(self._list_classes)

    def _list_classes(self) -> list[Classroom]:
        with self._session() as session:
            rows = session.scalars(select(ClassRow).order_by(ClassRow.name))
            return [row.to_model() for row in rows]

    async def get_class(self, class_id: int) -> Classroom | None:
        return await self._run(self._get_class, class_id)

    def _get_class(self, class_id: int) -> Classroom | None:
        with self._session() as session:
            row = session.get(ClassRow, class_id)
            return row.to_model() if row else None

    async def delete_class(self, class_id: int) -> bool:
        return await self._run(self._delete_class, class_id)

    def _delete_class(self, class_id: int) -> bool:
        with self._session() as session:
            row = session.get(ClassRow, class_id)
            if row is None:
                return False
            session.delete(row)
            return True

    # ── Students ─────────────────────────────────────────────
    async def list_students(self, class_id: int) -> list[Student]:
        return await self._run(self._list_students, class_id)

    def _list_students(self, class_id: int) -> list[Student]:
        with self._session() as session:
            rows = session.scalars(
                select(StudentRow)
                .where(StudentRow.class_id == class_id)
                .order_by(StudentRow.username),
            )
            return [row.to_model() for row in rows]

    async def add_student(self, class_id: int, username: str) -> Student:
        return await self._run(self._add_student, class_id, username)

    def _add_student(self, class_id: int, username: str) -> Student:
        try:
            with self._session() as session:
                if session.get(ClassRow, class_id) is None:
                    msg = f"class {class_id} does not exist"
                    raise StoreError(msg)
                row = StudentRow(class_id=class_id, username=username, github_username=username)
                session.add(row)
                session.flush()
                return row.to_model()
        except IntegrityError:
            msg = f"Student '{username}' is already in this class"
            raise StoreError(msg) from None

    async def delete_student(self, student_id: int) -> bool:
        return await self._run(self._delete_student, student_id)

    def _delete_student(self, student_id: int) -> bool:
        with self._session() as session:
            row = session.get(StudentRow, student_id)
            if row is None:
                return False
            session.delete(row)
            return True

    async def count_students(self, class_id: int) -> int:
        return await self._run(self._count_students, class_id)

    def _count_students(self, class_id: int) -> int:
        with self._session() as session:
            stmt = select(func.count()).select_from(StudentRow).where(
                StudentRow.class_id == class_id,
            )
            return session.scalar(stmt) or 0
