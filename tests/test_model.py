# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Tests for the syslog message model

# Standard library imports
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

# Third-party imports
import pytest

from pydantic import ValidationError

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import InvalidMessageError
from ziggiz_courier_dropoff_syslog.model import (
    Facility,
    Severity,
    StructuredDataElement,
    SyslogMessage,
    compute_priority,
    create_rfc3164_message,
    create_rfc5424_message,
    decode_priority,
)


class TestPriority:
    """Tests for PRI computation and decoding."""

    @pytest.mark.unit
    def test_priority_round_trip_for_every_pair(self):
        """Every facility/severity pair maps to facility * 8 + severity and back."""
        for facility in Facility:
            for severity in Severity:
                pri = compute_priority(facility, severity)
                assert pri == facility.value * 8 + severity.value
                assert decode_priority(pri) == (facility, severity)

    @pytest.mark.unit
    def test_enumerations_are_complete(self):
        """There are 24 facilities and 8 severities."""
        assert len(Facility) == 24
        assert len(Severity) == 8
        assert Facility.LOCAL7 == 23
        assert Severity.EMERGENCY == 0
        assert Severity.DEBUG == 7

    @pytest.mark.unit
    @pytest.mark.parametrize("priority", [-1, 192, 1000])
    def test_decode_priority_out_of_range(self, priority):
        """PRI values outside 0..191 are rejected."""
        with pytest.raises(InvalidMessageError):
            decode_priority(priority)

    @pytest.mark.unit
    def test_user_informational_is_14(self):
        assert compute_priority(Facility.USER, Severity.INFORMATIONAL) == 14


class TestKeywords:
    """Tests for resolving facility and severity keywords."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("user", Facility.USER),
            ("LOCAL0", Facility.LOCAL0),
            ("solaris-cron", Facility.SOLARIS_CRON),
            ("solaris_cron", Facility.SOLARIS_CRON),
            ("kernel", Facility.KERN),
            (" authpriv ", Facility.AUTHPRIV),
        ],
    )
    def test_facility_from_name(self, name, expected):
        assert Facility.from_name(name) is expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("info", Severity.INFORMATIONAL),
            ("Informational", Severity.INFORMATIONAL),
            ("err", Severity.ERROR),
            ("warn", Severity.WARNING),
            ("EMERG", Severity.EMERGENCY),
            ("debug", Severity.DEBUG),
        ],
    )
    def test_severity_from_name(self, name, expected):
        assert Severity.from_name(name) is expected

    @pytest.mark.unit
    def test_unknown_keywords(self):
        with pytest.raises(ValueError, match="Unknown syslog facility"):
            Facility.from_name("local8")
        with pytest.raises(ValueError, match="Unknown syslog severity"):
            Severity.from_name("loud")

    @pytest.mark.unit
    def test_keyword_property(self):
        assert Facility.SOLARIS_CRON.keyword == "solaris-cron"
        assert Facility.LOCAL3.keyword == "local3"
        assert Severity.INFORMATIONAL.keyword == "informational"


class TestSyslogMessage:
    """Tests for SyslogMessage construction."""

    @pytest.mark.unit
    def test_rfc3164_factory_defaults(self):
        """Hostname and timestamp default to this machine and now."""
        with patch(
            "ziggiz_courier_dropoff_syslog.model.socket.gethostname",
            return_value="testhost",
        ):
            message = create_rfc3164_message("App", "hello")

        assert message.hostname == "testhost"
        assert message.app_name == "App"
        assert message.message == "hello"
        assert message.facility is Facility.USER
        assert message.severity is Severity.INFORMATIONAL
        assert message.timestamp.tzinfo is not None
        assert message.proc_id is None
        assert message.msg_id is None
        assert message.structured_data == ()
        assert message.priority == 14

    @pytest.mark.unit
    def test_rfc5424_factory_fields(self, fixed_timestamp):
        message = create_rfc5424_message(
            "App",
            "hello",
            timestamp=fixed_timestamp,
            facility=Facility.LOCAL4,
            severity=Severity.WARNING,
            hostname="host1",
            proc_id="P1",
            msg_id="M1",
            structured_data=[
                StructuredDataElement(id="ex@123", params={"k": "v"}),
                ("other@123", {"a": "b"}),
            ],
        )

        assert message.timestamp == fixed_timestamp
        assert message.priority == 20 * 8 + 4
        assert message.proc_id == "P1"
        assert message.msg_id == "M1"
        assert [element.id for element in message.structured_data] == [
            "ex@123",
            "other@123",
        ]
        assert message.structured_data[1].params == (("a", "b"),)

    @pytest.mark.unit
    def test_naive_timestamp_rejected(self):
        """Timestamps must carry a UTC offset."""
        with pytest.raises(InvalidMessageError):
            create_rfc3164_message(
                "App", "hello", timestamp=datetime(2021, 3, 4, 13, 22, 1)
            )

    @pytest.mark.unit
    def test_facility_out_of_range_rejected(self, fixed_timestamp):
        with pytest.raises(InvalidMessageError):
            create_rfc3164_message(
                "App", "hello", timestamp=fixed_timestamp, facility=24
            )

    @pytest.mark.unit
    def test_integer_facility_and_severity_are_coerced(self, fixed_timestamp):
        message = create_rfc3164_message(
            "App", "hello", timestamp=fixed_timestamp, facility=16, severity=3
        )
        assert message.facility is Facility.LOCAL0
        assert message.severity is Severity.ERROR

    @pytest.mark.unit
    def test_message_is_immutable(self, fixed_timestamp):
        message = create_rfc3164_message(
            "App", "hello", timestamp=fixed_timestamp, hostname="host1"
        )
        with pytest.raises(ValidationError):
            message.hostname = "other"

    @pytest.mark.unit
    def test_none_message_becomes_empty(self, fixed_timestamp):
        message = SyslogMessage(
            timestamp=fixed_timestamp,
            facility=Facility.USER,
            severity=Severity.NOTICE,
            hostname="host1",
            app_name="App",
            message=None,
        )
        assert message.message == ""

    @pytest.mark.unit
    def test_timestamp_offset_preserved(self):
        timestamp = datetime(2021, 3, 4, 13, 22, 1, tzinfo=timezone(timedelta(hours=2)))
        message = create_rfc5424_message("App", timestamp=timestamp, hostname="h")
        assert message.timestamp.utcoffset() == timedelta(hours=2)


class TestStructuredDataElement:
    """Tests for StructuredDataElement."""

    @pytest.mark.unit
    def test_params_are_stringified_in_order(self):
        element = StructuredDataElement(id="ex@123", params={"b": 1, "a": True})
        assert element.params == (("b", "1"), ("a", "True"))

    @pytest.mark.unit
    def test_params_default_empty(self):
        assert StructuredDataElement(id="ex@123").params == ()

    @pytest.mark.unit
    def test_params_accept_pairs(self):
        element = StructuredDataElement(id="ex@123", params=[("k", 1), ["k", "2"]])
        assert element.params == (("k", "1"), ("k", "2"))

    @pytest.mark.unit
    def test_params_cannot_be_changed_after_construction(self, fixed_timestamp):
        source = {"k": "v"}
        message = create_rfc5424_message(
            "App",
            "hello",
            timestamp=fixed_timestamp,
            hostname="host1",
            structured_data=[("ex@1", source)],
        )
        source["k"] = "changed"

        params = message.structured_data[0].params
        with pytest.raises(TypeError):
            params[0] = ("k", "changed")  # type: ignore[index]
        assert params == (("k", "v"),)

    @pytest.mark.unit
    def test_message_with_structured_data_is_hashable(self, fixed_timestamp):
        message = create_rfc5424_message(
            "App",
            "hello",
            timestamp=fixed_timestamp,
            hostname="host1",
            structured_data=[("ex@1", {"k": "v"})],
        )
        assert hash(message) == hash(message.model_copy())
