"""The alembic history builds the schema the models describe."""
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from medicall.models.models import Base

ROOT = Path(__file__).resolve().parent.parent


def _alembic_config(db_file: Path) -> Config:
    config = Config()
    config.set_main_option("script_location", str(ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", f"sqlite+aiosqlite:///{db_file}")
    return config


def test_upgrade_matches_models_and_downgrade_clears(tmp_path):
    db_file = tmp_path / "migrated.db"
    config = _alembic_config(db_file)
    engine = create_engine(f"sqlite:///{db_file}")

    command.upgrade(config, "head")
    inspector = inspect(engine)

    assert set(inspector.get_table_names()) == set(Base.metadata.tables) | {"alembic_version"}
    for name, table in Base.metadata.tables.items():
        columns = {c["name"]: c["nullable"] for c in inspector.get_columns(name)}
        assert columns == {c.name: c.nullable for c in table.columns}, name
        indexes = {ix["name"] for ix in inspector.get_indexes(name)}
        assert indexes == {ix.name for ix in table.indexes}, name

    command.downgrade(config, "base")

    assert inspect(engine).get_table_names() == ["alembic_version"]
    engine.dispose()
