import os
import tempfile
from datetime import date

import pytest

# Keep tests independent from the runtime database.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="condo-signage-tests-")
os.environ["SIGNAGE_DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DB_DIR, 'test_signage.db')}"
os.environ.pop("SIGNAGE_API_KEY", None)

from fastapi.testclient import TestClient

from condo_signage.db import Base, SessionLocal, engine
from condo_signage.main import app


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def sindico(client):
    response = client.post(
        "/users",
        json={"nome": "Maria Síndica", "email": "maria@example.com", "tipo": "sindico", "limite_avisos": 2},
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def condominio(client, sindico):
    response = client.post(
        "/condominios",
        json={"nome": "Residencial Aurora", "sindico_id": sindico["id"], "cep": "01310-100", "localizacao": "São Paulo"},
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def make_tv(client, condominio):
    counter = {"value": 0}

    def _factory(template: str = "Template 1", **overrides):
        counter["value"] += 1
        payload = {
            "nome": f"TV {counter['value']}",
            "codigo_conexao": f"CODE-{counter['value']:04d}",
            "template": template,
            "condominio_id": condominio["id"],
        }
        payload.update(overrides)
        response = client.post("/tvs", json=payload)
        assert response.status_code == 200, response.text
        return response.json()

    return _factory
