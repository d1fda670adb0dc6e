"""Service-level tests for partial updates applied through SQLAlchemy."""

from __future__ import annotations

import unittest

from pydantic import BaseModel, Field
from sqlalchemy import String, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from partial import RecordKindError, UnmappedColumnError, extract
from partial.sql import apply_partial, build_update, update_values


class Base(DeclarativeBase):
    pass


class Jedi(Base):
    __tablename__ = "jedi"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(128), info={"db": "name"})
    rank: Mapped[str] = mapped_column(String(64), info={"db": "rank"})
    midichlorians: Mapped[int] = mapped_column(default=0, info={"db": "midichlorians"})


class JediUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, json_schema_extra={"db": "name"})
    rank: str | None = Field(default=None, json_schema_extra={"db": "rank"})
    midichlorians: int | None = Field(default=None, ge=0, json_schema_extra={"db": "midichlorians"})


class JediRenameRequest(BaseModel):
    name: str | None = Field(default=None, json_schema_extra={"db": "display_name"})


class SqlPartialUpdateTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autoflush=False, autocommit=False, future=True)
        Base.metadata.create_all(cls.engine)

    @classmethod
    def tearDownClass(cls) -> None:
        Base.metadata.drop_all(cls.engine)
        cls.engine.dispose()

    def setUp(self) -> None:
        self.db: Session = self.SessionLocal()
        self.db.query(Jedi).delete()
        self.db.add(Jedi(id=1, name="Obi-Wan Kenobi", rank="Knight", midichlorians=13400))
        self.db.commit()

    def tearDown(self) -> None:
        self.db.close()

    def test_build_update_sets_only_provided_fields(self) -> None:
        stmt = build_update(Jedi, JediUpdateRequest(rank="Master"), Jedi.id == 1)
        self.assertIsNotNone(stmt)

        self.db.execute(stmt)
        self.db.commit()

        jedi = self.db.scalar(select(Jedi).where(Jedi.id == 1))
        self.assertEqual(jedi.rank, "Master")
        self.assertEqual(jedi.name, "Obi-Wan Kenobi")
        self.assertEqual(jedi.midichlorians, 13400)

    def test_build_update_returns_none_for_empty_payload(self) -> None:
        self.assertIsNone(build_update(Jedi, JediUpdateRequest(), Jedi.id == 1))

    def test_unmapped_tag_values_are_rejected(self) -> None:
        with self.assertRaises(UnmappedColumnError) as ctx:
            update_values(Jedi, JediRenameRequest(name="Ben Kenobi"))
        self.assertIn("display_name", str(ctx.exception))

    def test_apply_partial_sets_attributes_on_instance(self) -> None:
        jedi = self.db.scalar(select(Jedi).where(Jedi.id == 1))

        applied = apply_partial(jedi, JediUpdateRequest(name="Ben Kenobi", midichlorians=13500))
        self.db.commit()

        self.assertEqual(applied, {"name": "Ben Kenobi", "midichlorians": 13500})
        refreshed = self.db.scalar(select(Jedi).where(Jedi.id == 1))
        self.assertEqual(refreshed.name, "Ben Kenobi")
        self.assertEqual(refreshed.rank, "Knight")
        self.assertEqual(refreshed.midichlorians, 13500)

    def test_orm_rows_are_records(self) -> None:
        transient = Jedi(name="Ahsoka Tano")

        self.assertEqual(extract(transient, "db"), {"name": "Ahsoka Tano"})

    def test_target_model_must_be_mapped(self) -> None:
        with self.assertRaises(RecordKindError):
            update_values(JediUpdateRequest, JediUpdateRequest(rank="Master"))


if __name__ == "__main__":
    unittest.main()
