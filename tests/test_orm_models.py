"""Tests for the ORM base class and the forms schema.

Tests verify:
1. Schema creation (tables)
2. Attribute maps in both key conventions
3. Validation through pydantic schemas
4. Relationships and cascade behavior
"""

from __future__ import annotations

from sqlalchemy import inspect, select

from rest_mediator.constants import KeyType
from rest_mediator.models.orm import (
    Condition,
    Element,
    Form,
    Note,
    Requirement,
    Validatable,
    ValidationFailure,
)
from sample_models import Gadget, User


class TestSchemaCreation:
    """Test database schema creation."""

    def test_forms_tables_created(self, engine):
        """Test that the forms tables are created."""
        expected_tables = {"forms", "elements", "conditions", "requirements", "notes"}

        actual_tables = set(inspect(engine).get_table_names())

        assert expected_tables <= actual_tables

    def test_foreign_keys(self, engine):
        """Test that requirement foreign keys reference their tables."""
        foreign_keys = inspect(engine).get_foreign_keys("requirements")
        referred = {fk["referred_table"] for fk in foreign_keys}

        assert referred == {"elements", "conditions"}


class TestAttributeMaps:
    """Test Base.to_dict/from_dict."""

    def test_to_dict_field_names(self, owner):
        """Test flattening with column names."""
        assert owner.to_dict() == {"id": 3, "name": "Ada", "email": "ada@example.org"}

    def test_to_dict_property_names(self, owner):
        """Test flattening with attribute names."""
        assert owner.to_dict(KeyType.PROPNAME) == {
            "id": 3,
            "full_name": "Ada",
            "email": "ada@example.org",
        }

    def test_from_dict_field_names(self):
        """Test assignment with column names."""
        user = User()
        user.from_dict({"name": "Grace", "email": None, "unknown": 1})

        assert user.full_name == "Grace"
        assert user.email is None

    def test_from_dict_property_names(self):
        """Test assignment with attribute names."""
        user = User()
        user.from_dict({"full_name": "Grace", "name": "ignored"}, key_type="propname")

        assert user.full_name == "Grace"

    def test_relationships_not_flattened(self, session):
        """Test that relationship attributes are not part of the map."""
        form = Form(slug="intake", name="Intake")
        form.elements.append(Element(type="text"))
        session.add(form)
        session.flush()

        attributes = form.elements[0].to_dict()

        assert attributes["form_id"] == form.id
        assert "form" not in attributes
        assert "requirements" not in attributes


class TestValidation:
    """Test the Validatable mixin."""

    def test_plain_entity_is_not_validatable(self):
        """Test that entities without the mixin have no validation capability."""
        assert not isinstance(Gadget(), Validatable)
        assert not isinstance(Note(), Validatable)

    def test_valid_form(self):
        """Test a form satisfying its schema."""
        form = Form(slug="intake-2024", name="Intake")

        assert form.validate()
        assert form.get_validation_failures() == []

    def test_invalid_form(self):
        """Test failures reported for an invalid form."""
        form = Form(slug="", name="Intake")

        assert not form.validate()
        failures = form.get_validation_failures()
        assert len(failures) == 1
        assert failures[0].property_path == "slug"
        assert isinstance(failures[0], ValidationFailure)

    def test_missing_required_field(self):
        """Test that a None required field fails validation."""
        element = Element(form_id=1, type=None)

        assert not element.validate()
        assert [failure.property_path for failure in element.get_validation_failures()] == ["type"]

    def test_element_linked_through_relationship(self):
        """Test that an element attached to an unsaved form validates."""
        element = Element(form=Form(slug="intake", name="Intake"), type="text")

        assert element.form_id is None
        assert element.validate()

    def test_failures_before_validate(self):
        """Test that no failures are reported before validation runs."""
        assert Form().get_validation_failures() == []

    def test_failures_reset_on_revalidation(self):
        """Test that fixing the entity clears its failures."""
        condition = Condition(type="unknown")
        assert not condition.validate()

        condition.type = "not-blank"
        assert condition.validate()
        assert condition.get_validation_failures() == []

    def test_requirement_schema(self):
        """Test requirement validation."""
        requirement = Requirement(element_id=1, condition_id=0, failure_message="")

        assert not requirement.validate()
        paths = {failure.property_path for failure in requirement.get_validation_failures()}
        assert paths == {"condition_id", "failure_message"}


class TestRelationships:
    """Test forms schema relationships."""

    def test_requirement_links(self, session):
        """Test element/condition/requirement relationships."""
        form = Form(slug="intake", name="Intake")
        element = Element(form=form, type="text", label="Name")
        condition = Condition(type="not-blank")
        requirement = Requirement(
            element=element,
            condition=condition,
            failure_message="Name is required",
        )
        session.add(requirement)
        session.flush()

        assert requirement.element_id == element.id
        assert requirement.condition_id == condition.id
        assert element.requirements == [requirement]
        assert form.elements == [element]

    def test_cascade_delete_elements(self, session):
        """Test that deleting a form deletes its elements."""
        form = Form(slug="intake", name="Intake")
        form.elements.append(Element(type="text"))
        session.add(form)
        session.flush()

        session.delete(form)
        session.flush()

        assert session.scalars(select(Element)).all() == []

    def test_note_detached_from_deleted_form(self, session):
        """Test that notes survive deletion of their form."""
        form = Form(slug="intake", name="Intake")
        note = Note(form=form, body="Reviewed", author="ada")
        session.add(note)
        session.flush()

        session.delete(form)
        session.flush()

        assert session.get(Note, note.id).form_id is None
