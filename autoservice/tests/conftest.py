from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from autoservice.infrastructure.db import create_db_engine, create_session_factory, init_db
from autoservice.shared.config import AppConfig, DatabaseConfig, MailConfig, SecurityConfig


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        app_env="test",
        log_level="DEBUG",
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'autoservice.db'}"),
        security=SecurityConfig(
            jwt_secret="test-secret",
            password_hash_method="pbkdf2:sha256:1000",
        ),
        mail=MailConfig(),
    )


@pytest.fixture()
def engine(app_config: AppConfig) -> Engine:
    engine = create_db_engine(app_config.database)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(engine)


@pytest.fixture(autouse=True)
def _log_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "app.log"))
