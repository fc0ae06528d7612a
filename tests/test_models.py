"""Tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from gobath_sdk.models import (
    CallConfig,
    CallDescriptor,
    ErrorPayload,
    MetaList,
    PaginationWindow,
    ResponseEnvelope,
)


class TestCallConfig:
    """Tests for CallConfig model."""

    def test_defaults(self):
        """Should default to no token and no coalescing."""
        config = CallConfig()
        assert config.token is None
        assert config.prevent_parallel is False
        assert config.on_progress is None

    def test_camel_case_aliases(self):
        """Should accept camelCase keys."""
        config = CallConfig.model_validate({"preventParallel": "key", "onProgress": print})
        assert config.prevent_parallel == "key"
        assert config.on_progress is print

    def test_snake_case_names(self):
        """Should accept field names too."""
        config = CallConfig.model_validate({"prevent_parallel": True})
        assert config.prevent_parallel is True

    def test_string_key_stays_string(self):
        """Should not coerce string keys to booleans."""
        assert CallConfig(prevent_parallel="true").prevent_parallel == "true"

    def test_frozen(self):
        """Should reject mutation."""
        config = CallConfig()
        with pytest.raises(ValidationError):
            config.token = "x"

    def test_rejects_non_callable_progress(self):
        """Should validate the progress callback."""
        with pytest.raises(ValidationError):
            CallConfig(on_progress="not callable")


class TestCallDescriptor:
    """Tests for CallDescriptor model."""

    def test_verb_and_resource(self):
        """Should split the verb from the resource segments."""
        descriptor = CallDescriptor(segments=("Profile", "Avatar", "PATCH"))
        assert descriptor.verb == "PATCH"
        assert descriptor.resource == ("Profile", "Avatar")

    def test_requires_resource_and_verb(self):
        """Should reject descriptors with a single segment."""
        with pytest.raises(ValidationError):
            CallDescriptor(segments=("GET",))

    def test_none_config_becomes_default(self):
        """Should substitute a default config for None."""
        descriptor = CallDescriptor(segments=("Profile", "GET"), config=None)
        assert descriptor.config == CallConfig()

    def test_config_from_dict(self):
        """Should validate a config dict."""
        descriptor = CallDescriptor(segments=("Profile", "GET"), config={"preventParallel": True})
        assert descriptor.config.prevent_parallel is True

    def test_query_from_model(self):
        """Should dump model queries to plain dicts."""
        descriptor = CallDescriptor(
            segments=("Notifications", "SEARCH"),
            query=PaginationWindow(offset=20, limit=10),
        )
        assert descriptor.query == {"offset": 20, "limit": 10}

    def test_body_is_not_validated(self):
        """Should keep arbitrary bodies as-is."""
        body = object()
        descriptor = CallDescriptor(segments=("Upload", "POST"), body=body)
        assert descriptor.body is body

    def test_frozen(self):
        """Should reject mutation."""
        descriptor = CallDescriptor(segments=("Profile", "GET"))
        with pytest.raises(ValidationError):
            descriptor.body = {}


class TestResponseEnvelope:
    """Tests for ResponseEnvelope model."""

    def test_success(self):
        """Should parse data and meta."""
        envelope = ResponseEnvelope.model_validate({"data": [1], "meta": {"total": 1}})
        assert envelope.data == [1]
        assert envelope.meta == {"total": 1}
        assert envelope.error is None

    def test_error_extras(self):
        """Should keep unknown error properties as extras."""
        envelope = ResponseEnvelope.model_validate(
            {"error": {"code": "E", "message": "m", "retry_after": 30}}
        )
        assert isinstance(envelope.error, ErrorPayload)
        assert envelope.error.model_extra == {"retry_after": 30}

    def test_error_without_code(self):
        """Should default a missing code to an empty string."""
        envelope = ResponseEnvelope.model_validate({"error": {"message": "m"}})
        assert envelope.error.code == ""
        assert envelope.error.message == "m"

    def test_numeric_code_is_stringified(self):
        """Should read a numeric error code as a string."""
        envelope = ResponseEnvelope.model_validate({"error": {"code": 429, "message": None}})
        assert envelope.error.code == "429"
        assert envelope.error.message is None

    def test_message_kept_as_sent(self):
        """Should not reject a structured error message."""
        envelope = ResponseEnvelope.model_validate(
            {"error": {"code": "INVALID", "message": {"name": "too short"}}}
        )
        assert envelope.error.message == {"name": "too short"}

    def test_bare_error_value(self):
        """Should wrap a non-object error as its message."""
        envelope = ResponseEnvelope.model_validate({"error": "boom"})
        assert envelope.error.code == ""
        assert envelope.error.message == "boom"

    @pytest.mark.parametrize("value", [None, False, 0, ""])
    def test_falsy_error_is_no_error(self, value):
        """Should treat falsy non-object errors as absent."""
        envelope = ResponseEnvelope.model_validate({"data": 1, "error": value})
        assert envelope.error is None

    def test_empty_error_object_is_an_error(self):
        """Should keep an empty error object."""
        envelope = ResponseEnvelope.model_validate({"error": {}})
        assert envelope.error == ErrorPayload()

    def test_non_object_body_rejected(self):
        """Should reject a body that is not an object."""
        with pytest.raises(ValidationError):
            ResponseEnvelope.model_validate(["data"])


class TestMetaList:
    """Tests for MetaList."""

    def test_behaves_like_list(self):
        """Should compare equal to a plain list and carry meta."""
        items = MetaList([1, 2], meta={"total": 2})
        assert items == [1, 2]
        assert items.meta == {"total": 2}


class TestPaginationWindow:
    """Tests for PaginationWindow model."""

    def test_valid(self):
        """Should accept a zero offset."""
        window = PaginationWindow(offset=0, limit=20)
        assert window.model_dump() == {"offset": 0, "limit": 20}

    @pytest.mark.parametrize(("offset", "limit"), [(-1, 10), (0, 0), (5, -3)])
    def test_invalid(self, offset, limit):
        """Should reject negative offsets and non-positive limits."""
        with pytest.raises(ValidationError):
            PaginationWindow(offset=offset, limit=limit)
