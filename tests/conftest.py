"""pytest configuration for rest_mediator tests."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from rest_mediator.db import create_db_and_tables, get_engine
from rest_mediator.mediator import SQLAlchemyMediator
from rest_mediator.models.orm import Condition, Element, Form, Note, Requirement
from sample_models import Gadget, Gizmo, User, Widget

HREF = "https://api.x/v1"


@pytest.fixture
def engine():
    """Create in-memory SQLite engine with every table created."""
    engine = get_engine("sqlite:///:memory:")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """Create SQLAlchemy session for testing."""
    with Session(engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def class_map():
    """Resource types of the test models and the forms schema."""
    return {
        "users": User,
        "widgets": Widget,
        "gadgets": Gadget,
        "gizmos": Gizmo,
        "forms": Form,
        "elements": Element,
        "conditions": Condition,
        "requirements": Requirement,
        "notes": Note,
    }


@pytest.fixture
def mediator(session, class_map):
    """Mediator over every test resource type."""
    return SQLAlchemyMediator(session, HREF, class_map)


@pytest.fixture
def owner(session):
    """Persisted user with id 3."""
    user = User(id=3, full_name="Ada", email="ada@example.org")
    session.add(user)
    session.flush()
    return user


@pytest.fixture
def mixed_widgets(session, owner):
    """Five widgets with mixed statuses, ids 1-5."""
    widgets = [
        Widget(id=1, name="alpha", status="open", owner_id=owner.id),
        Widget(id=2, name="beta", status="closed", owner_id=owner.id),
        Widget(id=3, name="gamma", status="open", owner_id=None),
        Widget(id=4, name="delta", status="pending", owner_id=None),
        Widget(id=5, name="epsilon", status="open", owner_id=owner.id),
    ]
    session.add_all(widgets)
    session.flush()
    return widgets
