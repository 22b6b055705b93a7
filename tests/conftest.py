import pytest

from hoteldesk.components.descriptors import ColumnDescriptor


@pytest.fixture
def db(tmp_path):
    """Fresh SQLite database bound to the models for one test."""
    from hoteldesk import db as db_module

    db_module.init_db(str(tmp_path / "hoteldesk.db"))
    db_module.create_tables()
    yield db_module.database
    db_module.close_db()


@pytest.fixture
def guest_rows():
    statuses = ["Actif", "En attente", "Inactif", "Terminé"]
    rows = []
    for i in range(25):
        # every other row up to 24 is a "Dupont" -> 12 matches
        name = f"Dupont {i}" if i % 2 == 1 else f"Martin {i}"
        rows.append({"id": i + 1, "nom": name, "statut": statuses[i % 4], "nuits": i % 5})
    return rows


@pytest.fixture
def guest_columns():
    return [
        ColumnDescriptor(key="id", label="ID", sortable=True),
        ColumnDescriptor(key="nom", label="Nom", sortable=True, filterable=True),
        ColumnDescriptor(key="statut", label="Statut", kind="badge"),
        ColumnDescriptor(key="nuits", label="Nuits", kind="number", sortable=True),
    ]


@pytest.fixture
def client(tmp_path):
    from fastapi.testclient import TestClient

    from hoteldesk.api import create_app
    from hoteldesk.config import Config

    config = Config(database_path=str(tmp_path / "hoteldesk.db"))
    app = create_app(config)
    with TestClient(app) as client:
        yield client
