"""
Tests for include/exclude event filtering.
"""

import pytest

from redis_event_listener.core.errors import ConfigurationError
from redis_event_listener.events.filter import FilterPolicy, should_forward
from redis_event_listener.events.types import EventType, OperationType


class TestShouldForward:
    """Test the forwarding rule."""

    def test_empty_policy_forwards_everything(self):
        policy = FilterPolicy()

        assert all(should_forward(tag, policy) for tag in EventType)
        assert all(should_forward(tag, policy) for tag in OperationType)

    def test_excluded_tag_dropped(self):
        policy = FilterPolicy(excluded={EventType.LOGIN_ERROR})

        assert should_forward(EventType.LOGIN, policy)
        assert not should_forward(EventType.LOGIN_ERROR, policy)

    def test_include_set_restricts(self):
        policy = FilterPolicy(included={EventType.LOGIN})

        assert should_forward(EventType.LOGIN, policy)
        assert not should_forward(EventType.LOGOUT, policy)

    def test_matches_rule_for_every_tag(self):
        excluded = {OperationType.DELETE}
        included = {OperationType.CREATE, OperationType.UPDATE}
        policy = FilterPolicy(excluded=excluded, included=included)

        for tag in OperationType:
            expected = tag not in excluded and (not included or tag in included)
            assert should_forward(tag, policy) is expected


class TestFilterPolicy:
    """Test policy construction."""

    def test_sets_are_frozen(self):
        policy = FilterPolicy(excluded=[EventType.LOGIN_ERROR])

        assert policy.excluded == frozenset({EventType.LOGIN_ERROR})
        assert policy.included == frozenset()

    def test_overlapping_event_sets_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            FilterPolicy.from_names(
                EventType, excluded=["LOGIN"], included=["LOGIN", "LOGOUT"]
            )

        assert exc_info.value.details["conflicting"] == ["LOGIN"]
        assert exc_info.value.details["config_key"] == "include-events"

    def test_overlapping_operation_sets_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            FilterPolicy.from_names(
                OperationType,
                excluded=["DELETE"],
                included=["DELETE"],
                name="operations",
            )

        assert exc_info.value.details["config_key"] == "include-operations"

    def test_policies_are_independent(self):
        events = FilterPolicy.from_names(EventType, excluded=["UPDATE_PROFILE"])
        operations = FilterPolicy.from_names(
            OperationType, included=["UPDATE"], name="operations"
        )

        assert events.excluded == {EventType.UPDATE_PROFILE}
        assert operations.included == {OperationType.UPDATE}

    def test_unknown_name_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            FilterPolicy.from_names(EventType, excluded=["LOGIN", "SIGN_IN"])

        assert "SIGN_IN" in exc_info.value.message
        assert exc_info.value.details["config_key"] == "exclude-events"

    def test_recent_host_tags_resolve(self):
        policy = FilterPolicy.from_names(
            EventType,
            excluded=["UPDATE_CREDENTIAL", "OAUTH2_DEVICE_CODE_TO_TOKEN_ERROR"],
        )

        assert not should_forward(EventType.UPDATE_CREDENTIAL, policy)
        assert should_forward(EventType.UPDATE_PASSWORD, policy)

    def test_names_are_stripped(self):
        policy = FilterPolicy.from_names(EventType, included=[" LOGIN "])

        assert policy.included == {EventType.LOGIN}
