#!/usr/bin/env python3
"""Basic usage example for shortkeys.

This example demonstrates:
1. Defining an output model with Pydantic
2. Building a compressed structured-output schema
3. Expanding a compressed response back to original names
4. Comparing schema and response sizes
"""

from __future__ import annotations

import json
from typing import Optional

from pydantic import BaseModel, Field

from shortkeys import OutputSchema


class Address(BaseModel):
    """Mailing address."""

    street: str = Field(description="Street and number")
    city: str
    zip_code: str


class UserProfile(OutputSchema):
    """A user profile extracted from free text."""

    first_name: str = Field(description="User's first name")
    last_name: str = Field(description="User's last name")
    age: int
    address: Address
    hobbies: list[str] = Field(description="List of hobbies")
    nickname: Optional[str] = None


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("shortkeys Basic Usage Example")
    print("=" * 60)
    print()

    # Build both envelopes
    print("1. Building structured-output schemas...")
    plain = UserProfile.to_json_schema()
    compressed = UserProfile.to_json_schema(compress=True)

    print(f"   Original keys:   {list(plain['schema']['properties'])}")
    print(f"   Compressed keys: {list(compressed['schema']['properties'])}")
    print()

    # Descriptions keep the original names for the model
    print("2. Compressed property descriptions...")
    for code, node in compressed["schema"]["properties"].items():
        print(f"   {code}: {node.get('description')}")
    print()

    print("3. Field map (store this next to the request)...")
    print(f"   {json.dumps(compressed['field_map'])}")
    print()

    # What a model would answer with the compressed schema
    print("4. Decoding a compressed response...")
    response_text = (
        '{"f": "John", "l": "Doe", "a": 30, '
        '"ad": {"s": "123 Main St", "c": "Springfield", "z": "12345"}, '
        '"h": ["reading", "coding"], "n": null}'
    )
    profile = UserProfile.from_compressed(json.loads(response_text), compressed["field_map"])

    print(f"   Name: {profile.first_name} {profile.last_name}")
    print(f"   Age: {profile.age}")
    print(f"   City: {profile.address.city}")
    print(f"   Hobbies: {', '.join(profile.hobbies)}")
    print()

    # Compare sizes
    print("5. Comparing sizes...")
    plain_schema = json.dumps(plain["schema"])
    compressed_schema = json.dumps(compressed["schema"])
    plain_response = profile.model_dump_json()

    print(f"   Schema:   {len(plain_schema)} -> {len(compressed_schema)} bytes")
    print(f"   Response: {len(plain_response)} -> {len(response_text)} bytes")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
