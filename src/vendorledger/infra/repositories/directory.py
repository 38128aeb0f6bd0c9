"""SQLModel repositories for admins and branches."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.directory import Admin, Branch


class SQLModelAdminRepository:
    """Pass-through storage for posting actors."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_username(self, username: str) -> Optional[Admin]:
        with self.session_factory() as session:
            admin = session.exec(select(Admin).where(Admin.username == username)).first()
            if admin:
                session.expunge(admin)
            return admin

    def create(self, admin: Admin) -> Admin:
        with self.session_factory() as session:
            session.add(admin)
            session.commit()
            session.refresh(admin)
            session.expunge(admin)
            return admin

    def list_all(self) -> list[Admin]:
        with self.session_factory() as session:
            rows = list(session.exec(select(Admin).order_by(Admin.username)).all())  # type: ignore
            session.expunge_all()
            return rows


class SQLModelBranchRepository:
    """Pass-through storage for organizational units."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def create(self, branch: Branch) -> Branch:
        with self.session_factory() as session:
            session.add(branch)
            session.commit()
            session.refresh(branch)
            session.expunge(branch)
            return branch

    def list_all(self) -> list[Branch]:
        with self.session_factory() as session:
            rows = list(session.exec(select(Branch).order_by(Branch.name)).all())  # type: ignore
            session.expunge_all()
            return rows
