"""
RBAC graph: users hold roles and belong to groups, groups grant roles, roles
bundle permissions, and each permission belongs to one authority.
"""

from sqlalchemy import Boolean, Column, ForeignKey, String, Table, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from raas.database.base import Base, IdMixin

user_roles = Table(
    "R_T000202_T000203",
    Base.metadata,
    Column("F_01", ForeignKey("T_00_02_02.F_00"), primary_key=True),
    Column("F_02", ForeignKey("T_00_02_03.F_00"), primary_key=True),
)

user_groups = Table(
    "R_T000202_T000201",
    Base.metadata,
    Column("F_01", ForeignKey("T_00_02_02.F_00"), primary_key=True),
    Column("F_02", ForeignKey("T_00_02_01.F_00"), primary_key=True),
)

group_roles = Table(
    "R_T000201_T000203",
    Base.metadata,
    Column("F_01", ForeignKey("T_00_02_01.F_00"), primary_key=True),
    Column("F_02", ForeignKey("T_00_02_03.F_00"), primary_key=True),
)

role_permissions = Table(
    "R_T000203_T000204",
    Base.metadata,
    Column("F_01", ForeignKey("T_00_02_03.F_00"), primary_key=True),
    Column("F_02", ForeignKey("T_00_02_04.F_00"), primary_key=True),
)


class Group(IdMixin, Base):
    __tablename__ = "T_00_02_01"
    __table_args__ = (UniqueConstraint("F_01", name="T_00_02_01_UK_01"),)

    name: Mapped[str] = mapped_column("F_01", String(50), nullable=False)
    description: Mapped[str | None] = mapped_column("F_02", String(200))

    roles: Mapped[list["Role"]] = relationship(secondary=group_roles, lazy="select")
    users: Mapped[list["User"]] = relationship(secondary=user_groups, back_populates="groups", lazy="select")

    def __repr__(self) -> str:
        return f"<Group(id={self.id!r}, name={self.name!r})>"


class User(IdMixin, Base):
    __tablename__ = "T_00_02_02"
    __table_args__ = (
        UniqueConstraint("F_01", name="T_00_02_02_UK_01"),
        UniqueConstraint("F_02", name="T_00_02_02_UK_02"),
    )

    username: Mapped[str] = mapped_column("F_01", String(20), nullable=False)
    email: Mapped[str] = mapped_column("F_02", String(100), nullable=False)
    password: Mapped[str] = mapped_column("F_03", String(100), nullable=False)  # bcrypt hash, never plain text
    enabled: Mapped[bool] = mapped_column("F_04", Boolean, default=True, nullable=False)

    roles: Mapped[list["Role"]] = relationship(secondary=user_roles, lazy="select")
    groups: Mapped[list["Group"]] = relationship(secondary=user_groups, back_populates="users", lazy="select")

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, username={self.username!r}, email={self.email!r})>"


class Role(IdMixin, Base):
    __tablename__ = "T_00_02_03"
    __table_args__ = (UniqueConstraint("F_01", name="T_00_02_03_UK_01"),)

    name: Mapped[str] = mapped_column("F_01", String(50), nullable=False)
    description: Mapped[str | None] = mapped_column("F_02", String(200))

    permissions: Mapped[list["Permission"]] = relationship(secondary=role_permissions, lazy="select")

    def __repr__(self) -> str:
        return f"<Role(id={self.id!r}, name={self.name!r})>"


class Permission(IdMixin, Base):
    __tablename__ = "T_00_02_04"
    __table_args__ = (UniqueConstraint("F_01", name="T_00_02_04_UK_01"),)

    name: Mapped[str] = mapped_column("F_01", String(100), nullable=False)
    description: Mapped[str | None] = mapped_column("F_02", String(200))
    authority_id: Mapped[int] = mapped_column("F_03", ForeignKey("T_00_02_05.F_00"), nullable=False)

    authority: Mapped["Authority"] = relationship(back_populates="permissions", lazy="select")

    def __repr__(self) -> str:
        return f"<Permission(id={self.id!r}, name={self.name!r})>"


class Authority(IdMixin, Base):
    __tablename__ = "T_00_02_05"
    __table_args__ = (UniqueConstraint("F_01", name="T_00_02_05_UK_01"),)

    name: Mapped[str] = mapped_column("F_01", String(50), nullable=False)
    description: Mapped[str | None] = mapped_column("F_02", String(200))

    permissions: Mapped[list["Permission"]] = relationship(back_populates="authority", lazy="select")

    def __repr__(self) -> str:
        return f"<Authority(id={self.id!r}, name={self.name!r})>"
