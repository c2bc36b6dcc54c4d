"""
Group model and the group -> permission grant table.
"""
from sqlalchemy import String, ForeignKey, Table, Column
from sqlalchemy.orm import Mapped, mapped_column, relationship

from userhub.core.database.associations import Association
from userhub.core.database.base import Base, SoftDeleteMixin, TimestampMixin, generate_ulid


# Group-Permission relationship
group_permissions = Table(
    "group_permissions",
    Base.metadata,
    Column("group_id", String(26), ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", String(26), ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)

grants = Association(group_permissions, "group_id", "permission_id")


class Group(Base, TimestampMixin, SoftDeleteMixin):
    """
    Group model for organizing users with common permissions.

    Examples: Admin, Level 1, Level 2
    """
    __tablename__ = "groups"

    # Primary key using ULID
    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # Read-only views; edges are written through `grants` and `memberships`
    permissions: Mapped[list["Permission"]] = relationship(  # type: ignore
        "Permission",
        secondary=group_permissions,
        order_by="Permission.name",
        viewonly=True,
        lazy="selectin",
    )

    users: Mapped[list["User"]] = relationship(  # type: ignore
        "User",
        secondary="user_groups",
        order_by="User.id",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name!r})>"
