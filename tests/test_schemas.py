"""
SocialAPI Backend: Schema Tests
===============================

What:  Request validation rules, camelCase aliases, derived counts and the
       createdAt display format.
"""

from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError

from socialapi.schemas.common import format_timestamp
from socialapi.schemas.thought import ReactionCreate, ThoughtCreate, ThoughtResponse
from socialapi.schemas.user import UserCreate, UserResponse, UserUpdate


class TestFormatTimestamp:

    def test_afternoon(self):
        assert format_timestamp(datetime(2024, 1, 5, 15, 7, tzinfo=timezone.utc)) == "3:07pm on 5 Jan 2024"

    def test_midnight_is_twelve_am(self):
        assert format_timestamp(datetime(2023, 12, 31, 0, 0, tzinfo=timezone.utc)) == "12:00am on 31 Dec 2023"

    def test_noon_is_twelve_pm(self):
        assert format_timestamp(datetime(2024, 6, 1, 12, 30, tzinfo=timezone.utc)) == "12:30pm on 1 Jun 2024"

    def test_naive_is_treated_as_utc(self):
        assert format_timestamp(datetime(2024, 1, 5, 9, 5)) == "9:05am on 5 Jan 2024"

    def test_other_zones_are_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        assert format_timestamp(datetime(2024, 1, 5, 17, 7, tzinfo=plus_two)) == "3:07pm on 5 Jan 2024"


class TestUserSchemas:

    @pytest.mark.parametrize("email", ["a@b.co", "first.last@mail.example.org", "x-y_z@sub.domain.io"])
    def test_valid_emails(self, email):
        assert UserCreate(username="u", email=email).email == email

    @pytest.mark.parametrize("email", ["plainaddress", "missing@tld", "a@b.toolongtld", "@example.com"])
    def test_invalid_emails(self, email):
        with pytest.raises(PydanticValidationError):
            UserCreate(username="u", email=email)

    def test_username_is_trimmed(self):
        assert UserCreate(username="  lernantino ", email="l@example.com").username == "lernantino"

    def test_update_requires_a_field(self):
        with pytest.raises(PydanticValidationError):
            UserUpdate()

    def test_update_changes_only_supplied_fields(self):
        assert UserUpdate(email="new@example.com").changes() == {"email": "new@example.com"}

    def test_response_json_shape(self):
        uid, fid = ObjectId(), ObjectId()
        user = UserResponse.from_document(
            {"_id": uid, "username": "u", "email": "u@example.com", "thoughts": [], "friends": [fid]}
        )
        dumped = user.model_dump(by_alias=True, exclude_none=True)
        assert dumped == {
            "_id": str(uid),
            "username": "u",
            "email": "u@example.com",
            "thoughts": [],
            "friends": [str(fid)],
            "friendCount": 1,
        }


class TestThoughtSchemas:

    def test_accepts_camel_case_body(self):
        body = ThoughtCreate.model_validate(
            {"thoughtText": "hi", "username": "u", "userId": str(ObjectId())}
        )
        assert body.thought_text == "hi"

    def test_text_limit_is_280(self):
        ThoughtCreate(thought_text="x" * 280, username="u", user_id="id")
        with pytest.raises(PydanticValidationError):
            ThoughtCreate(thought_text="x" * 281, username="u", user_id="id")

    def test_empty_reaction_rejected(self):
        with pytest.raises(PydanticValidationError):
            ReactionCreate(reaction_body="", username="u")

    def test_response_json_shape(self, thought_doc):
        dumped = ThoughtResponse.from_document(thought_doc).model_dump(by_alias=True, exclude_none=True)
        assert dumped["_id"] == str(thought_doc["_id"])
        assert dumped["thoughtText"] == thought_doc["thoughtText"]
        assert dumped["createdAt"] == "3:07pm on 5 Jan 2024"
        assert dumped["reactionCount"] == 1
        assert set(dumped["reactions"][0]) == {"reactionId", "reactionBody", "username", "createdAt"}
        assert "warning" not in dumped
