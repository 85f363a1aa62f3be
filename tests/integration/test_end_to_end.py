"""End-to-end integration tests."""

from __future__ import annotations

import json
from typing import ClassVar, Optional

import pytest
from pydantic import BaseModel, Field

from shortkeys import DecodeError, OutputSchema, compress, decode, expand, model_json_schema


class Address(BaseModel):
    """Mailing address."""

    street: str
    city: str
    zip_code: str


class UserProfile(OutputSchema):
    """A user profile."""

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    age: int
    address: Address
    hobbies: list[str] = Field(description="List of hobbies")
    nickname: Optional[str] = None


class Person(BaseModel):
    """A person."""

    name: str = Field(description="Person's name")
    age: int = Field(description="Person's age")


class Company(OutputSchema):
    """A company and its people."""

    company_name: str = Field(description="Company name")
    ceo: Person
    employees: list[Person]

    shortkeys_name: ClassVar[Optional[str]] = "company"


class Organization(OutputSchema):
    """An organization."""

    ceo: Person = Field(description="Chief executive")
    founded: int


class TestUserProfileWorkflow:
    """Test the user profile workflow."""

    def test_compressed_schema(self) -> None:
        """Test the compressed envelope."""
        envelope = UserProfile.to_json_schema(compress=True)

        assert envelope["name"] == "UserProfile"
        assert envelope["description"] == "A user profile."

        schema = envelope["schema"]
        # address collides with age
        assert list(schema["properties"]) == ["f", "l", "a", "ad", "h", "n"]
        assert schema["required"] == ["f", "l", "a", "ad", "h"]
        assert schema["additionalProperties"] is False
        assert schema["strict"] is True
        assert schema["properties"]["f"]["description"] == "first_name: User's first name"
        assert schema["properties"]["a"]["description"] == "age"
        assert list(schema["$defs"]["Address"]["properties"]) == ["s", "c", "z"]

    def test_envelope_is_json_serializable(self) -> None:
        """Test the envelope survives a JSON round trip."""
        envelope = UserProfile.to_json_schema(compress=True)
        assert json.loads(json.dumps(envelope)) == envelope

    def test_decode(self) -> None:
        """Test a compressed response decodes into the model."""
        envelope = UserProfile.to_json_schema(compress=True)
        response = {
            "f": "John",
            "l": "Doe",
            "a": 30,
            "ad": {"s": "123 Main St", "c": "Springfield", "z": "12345"},
            "h": ["reading", "coding"],
            "n": None,
        }

        profile = UserProfile.from_compressed(response, envelope["field_map"])

        assert profile == UserProfile(
            first_name="John",
            last_name="Doe",
            age=30,
            address=Address(street="123 Main St", city="Springfield", zip_code="12345"),
            hobbies=["reading", "coding"],
        )

    def test_decode_from_json_text(self) -> None:
        """Test decoding when both response and field map went through JSON."""
        envelope = json.loads(json.dumps(UserProfile.to_json_schema(compress=True)))
        response = json.loads(
            '{"f": "Ada", "l": "Lovelace", "a": 36, "ad": {"s": "St James", "c": "London", '
            '"z": "SW1"}, "h": [], "n": "Countess"}'
        )

        profile = decode(UserProfile, response, envelope["field_map"])
        assert profile.nickname == "Countess"
        assert profile.address.city == "London"

    def test_decode_invalid(self) -> None:
        """Test incomplete responses raise DecodeError."""
        envelope = UserProfile.to_json_schema(compress=True)
        with pytest.raises(DecodeError, match="UserProfile"):
            UserProfile.from_compressed({"f": "John"}, envelope["field_map"])

    def test_uncompressed_by_default(self) -> None:
        """Test the default envelope keeps original names."""
        envelope = UserProfile.to_json_schema()
        assert list(envelope["schema"]["properties"]) == [
            "first_name",
            "last_name",
            "age",
            "address",
            "hobbies",
            "nickname",
        ]
        assert "field_map" not in envelope


class TestCompanyWorkflow:
    """Test shared definitions referenced from several fields."""

    def test_definitions(self) -> None:
        """Test the definition is compressed once and reused."""
        envelope = Company.to_json_schema(compress=True)

        assert envelope["name"] == "company"
        assert list(envelope["schema"]["properties"]) == ["c", "ce", "e"]
        assert list(envelope["schema"]["$defs"]["Person"]["properties"]) == ["n", "a"]
        assert envelope["field_map"]["_defs"] == {"Person": {"n": "name", "a": "age"}}

    def test_decode(self) -> None:
        """Test object and array references decode through _defs."""
        envelope = Company.to_json_schema(compress=True)
        response = {
            "c": "Acme Corp",
            "ce": {"n": "Jane CEO", "a": 50},
            "e": [{"n": "John", "a": 30}, {"n": "Jane", "a": 25}],
        }

        company = Company.from_compressed(response, envelope["field_map"])

        assert company.company_name == "Acme Corp"
        assert company.ceo == Person(name="Jane CEO", age=50)
        assert company.employees == [Person(name="John", age=30), Person(name="Jane", age=25)]

    def test_described_model_field(self) -> None:
        """Test a model field with a description still resolves through _defs."""
        envelope = Organization.to_json_schema(compress=True)

        assert envelope["schema"]["properties"]["c"]["description"] == "ceo: Chief executive"
        assert envelope["field_map"]["c"] == {"_original": "ceo", "_ref": "Person"}

        organization = Organization.from_compressed(
            {"c": {"n": "Ada", "a": 36}, "f": 1843}, envelope["field_map"]
        )
        assert organization.ceo == Person(name="Ada", age=36)
        assert organization.founded == 1843


class TestRawSchemaWorkflow:
    """Test compression of raw property trees, without Pydantic."""

    def test_document_round_trip(self) -> None:
        """Test a document with nested arrays of objects."""
        properties = {
            "title": {"type": "string", "description": "Document title"},
            "metadata": {
                "type": "object",
                "properties": {
                    "author": {"type": "string"},
                    "created_at": {"type": "string"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
            },
            "sections": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "heading": {"type": "string"},
                        "content": {"type": "string"},
                        "subsections": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "properties": {
                                    "subheading": {"type": "string"},
                                    "text": {"type": "string"},
                                },
                            },
                        },
                    },
                },
            },
        }

        result = compress(properties, required=["title"])
        assert list(result.properties) == ["t", "m", "s"]

        meta = result.properties["m"]["properties"]
        section = result.properties["s"]["items"]["properties"]
        subsection = section[list(section)[2]]["items"]["properties"]
        # Every code in the tree is distinct
        codes = ["t", "m", "s", *meta, *section, *subsection]
        assert len(set(codes)) == len(codes)

        meta_codes = list(meta)
        section_codes = list(section)
        sub_codes = list(subsection)
        response = {
            "t": "Report",
            "m": {meta_codes[0]: "Ada", meta_codes[1]: "2026-01-01", meta_codes[2]: ["x"]},
            "s": [
                {
                    section_codes[0]: "Intro",
                    section_codes[1]: "Hello",
                    section_codes[2]: [{sub_codes[0]: "Why", sub_codes[1]: "Because"}],
                }
            ],
        }

        expanded = expand(response, result.field_map)

        assert expanded["title"] == "Report"
        assert expanded["metadata"] == {"author": "Ada", "created_at": "2026-01-01", "tags": ["x"]}
        assert expanded["sections"] == [
            {
                "heading": "Intro",
                "content": "Hello",
                "subsections": [{"subheading": "Why", "text": "Because"}],
            }
        ]

    def test_model_schema_matches_raw_compression(self) -> None:
        """Test model_json_schema() compresses the same way as compress()."""
        envelope = model_json_schema(Company, compress=True)
        raw = Company.model_json_schema()
        result = compress(raw["properties"], raw["required"], raw["$defs"])
        assert envelope["schema"]["properties"] == result.properties
        assert envelope["field_map"] == result.field_map.to_dict()
