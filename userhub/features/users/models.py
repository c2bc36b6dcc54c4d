"""
User model with ULID primary keys and the user -> group membership table.
"""
from sqlalchemy import String, ForeignKey, Table, Column
from sqlalchemy.orm import Mapped, mapped_column, relationship

from userhub.core.database.associations import Association
from userhub.core.database.base import Base, SoftDeleteMixin, TimestampMixin, generate_ulid


# User-Group relationship
user_groups = Table(
    "user_groups",
    Base.metadata,
    Column("user_id", String(26), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("group_id", String(26), ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
)

memberships = Association(user_groups, "user_id", "group_id")


class User(Base, TimestampMixin, SoftDeleteMixin):
    """
    User model.

    Email is unique among non-deleted users only, so the column carries an
    index but no unique constraint: a soft-deleted user's address can be
    reused.
    """
    __tablename__ = "users"

    # Primary key using ULID (Universally Unique Lexicographically Sortable Identifier)
    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Read-only view of live groups; edges are written through `memberships`
    groups: Mapped[list["Group"]] = relationship(  # type: ignore
        "Group",
        secondary=user_groups,
        primaryjoin="User.id == user_groups.c.user_id",
        secondaryjoin="and_(Group.id == user_groups.c.group_id, Group.deleted.is_(False))",
        order_by="Group.name",
        viewonly=True,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
