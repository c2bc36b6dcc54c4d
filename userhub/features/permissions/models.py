"""
Permission model.
"""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from userhub.core.database.base import Base, SoftDeleteMixin, TimestampMixin, generate_ulid


class Permission(Base, TimestampMixin, SoftDeleteMixin):
    """
    A named capability granted to groups.

    Examples: ManageUsers, ReadReports, WriteReports
    """
    __tablename__ = "permissions"

    # Primary key using ULID
    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Permission(id={self.id}, name={self.name!r})>"
