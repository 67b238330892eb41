# -*- coding: utf-8 -*-

# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2025 Ziggiz Inc.
#
# This file is part of the ziggiz-courier-core-data-processing and is licensed under the
# Business Source License 1.1. You may not use this file except in
# compliance with the License. You may obtain a copy of the License at:
# https://github.com/ziggiz-courier/ziggiz-courier-core-data-processing/blob/main/LICENSE
# Tests for the RFC 5424 serializer

# Standard library imports
from datetime import datetime, timedelta, timezone

# Third-party imports
import pytest

# Local/package imports
from ziggiz_courier_dropoff_syslog.errors import InvalidMessageError
from ziggiz_courier_dropoff_syslog.model import (
    StructuredDataElement,
    create_rfc5424_message,
)
from ziggiz_courier_dropoff_syslog.serialization.rfc5424 import (
    SyslogRFC5424Serializer,
    escape_param_value,
    render_structured_data,
)

HEADER = "<14>1 2021-03-04T13:22:01.000000+00:00 host1 App"


@pytest.fixture
def serializer():
    return SyslogRFC5424Serializer()


@pytest.fixture
def make_message(fixed_timestamp):
    def _make(message="hello", **kwargs):
        kwargs.setdefault("timestamp", fixed_timestamp)
        kwargs.setdefault("hostname", "host1")
        return create_rfc5424_message(kwargs.pop("app_name", "App"), message, **kwargs)

    return _make


class TestSyslogRFC5424Serializer:
    """Tests for the SyslogRFC5424Serializer class."""

    @pytest.mark.unit
    def test_reference_line(self, serializer, make_message):
        message = make_message(proc_id="P1", msg_id="M1")

        data = serializer.serialize(message)

        assert data.startswith(HEADER.encode() + b" P1 M1 - ")
        assert data.endswith(b" - \xef\xbb\xbfhello")
        assert serializer.render(message) == f"{HEADER} P1 M1 - \ufeffhello"

    @pytest.mark.unit
    def test_timestamp_has_microseconds_and_offset(self, serializer, make_message):
        timestamp = datetime(
            2021, 3, 4, 13, 22, 1, 123456, tzinfo=timezone(timedelta(hours=2))
        )
        line = serializer.render(make_message(timestamp=timestamp))
        assert line.split(" ")[1] == "2021-03-04T13:22:01.123456+02:00"

    @pytest.mark.unit
    def test_offset_with_seconds_rejected(self, serializer, make_message):
        timestamp = datetime(
            2021, 3, 4, 13, 22, 1, tzinfo=timezone(timedelta(hours=1, seconds=30))
        )
        with pytest.raises(InvalidMessageError, match="whole number of minutes"):
            serializer.render(make_message(timestamp=timestamp))

    @pytest.mark.unit
    def test_negative_offset(self, serializer, make_message):
        timestamp = datetime(
            2021, 3, 4, 13, 22, 1, tzinfo=timezone(timedelta(hours=-5, minutes=-30))
        )
        line = serializer.render(make_message(timestamp=timestamp))
        assert line.split(" ")[1] == "2021-03-04T13:22:01.000000-05:30"

    @pytest.mark.unit
    def test_absent_procid_and_msgid_render_nil(self, serializer, make_message):
        line = serializer.render(make_message(proc_id=None, msg_id=""))
        assert line == f"{HEADER} - - - \ufeffhello"

    @pytest.mark.unit
    def test_empty_message_omits_msg_and_trailing_space(
        self, serializer, make_message
    ):
        line = serializer.render(make_message(message="", proc_id="P1", msg_id="M1"))
        assert line == f"{HEADER} P1 M1 -"
        assert "\ufeff" not in line

    @pytest.mark.unit
    def test_single_structured_data_element(self, serializer, make_message):
        line = serializer.render(make_message(structured_data=[("ex@123", {"k": "v"})]))
        assert line == f'{HEADER} - - [ex@123 k="v"] \ufeffhello'

    @pytest.mark.unit
    def test_elements_and_params_keep_their_order(self, serializer, make_message):
        structured_data = [
            StructuredDataElement(
                id="myexampleSDID@12345", params={"myeventId": "1234", "a": "1"}
            ),
            StructuredDataElement(
                id="myexampleSDID@23456", params={"myeventSource": "My Application"}
            ),
        ]
        line = serializer.render(make_message(structured_data=structured_data))
        assert (
            '[myexampleSDID@12345 myeventId="1234" a="1"]'
            '[myexampleSDID@23456 myeventSource="My Application"]'
        ) in line

    @pytest.mark.unit
    def test_element_without_params(self, serializer, make_message):
        line = serializer.render(make_message(structured_data=[("ex@123", {})]))
        assert f"{HEADER} - - [ex@123] " in line

    @pytest.mark.unit
    def test_param_values_are_escaped(self, serializer, make_message):
        line = serializer.render(
            make_message(structured_data=[("ex@123", {"k": 'say "hi" [x]\\y'})])
        )
        assert '[ex@123 k="say \\"hi\\" [x\\]\\\\y"]' in line

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ('"', '\\"'),
            ("\\", "\\\\"),
            ("]", "\\]"),
            ("[", "["),
            ("plain", "plain"),
        ],
    )
    def test_escape_param_value(self, value, expected):
        assert escape_param_value(value) == expected

    @pytest.mark.unit
    def test_empty_structured_data_renders_nil(self):
        assert render_structured_data([]) == "-"
        assert render_structured_data(()) == "-"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "sd_id",
        ["", "bad]id", 'bad"id', "bad\\id", "bad id", "bad=id", "café@1", "x" * 33],
    )
    def test_invalid_sd_id(self, serializer, make_message, sd_id):
        message = make_message(structured_data=[(sd_id, {"k": "v"})])
        with pytest.raises(InvalidMessageError):
            serializer.render(message)

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["", "bad name", "bad=name", 'bad"name'])
    def test_invalid_param_name(self, serializer, make_message, name):
        message = make_message(structured_data=[("ex@123", {name: "v"})])
        with pytest.raises(InvalidMessageError):
            serializer.render(message)

    @pytest.mark.unit
    def test_duplicate_sd_id_rejected(self, serializer, make_message):
        message = make_message(
            structured_data=[("ex@123", {"a": "1"}), ("ex@123", {"b": "2"})]
        )
        with pytest.raises(InvalidMessageError, match="more than once"):
            serializer.render(message)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "hostname,app_name", [("", "App"), ("host1", ""), ("my host", "App")]
    )
    def test_missing_hostname_or_app_name(
        self, serializer, make_message, hostname, app_name
    ):
        message = make_message(hostname=hostname, app_name=app_name)
        with pytest.raises(InvalidMessageError):
            serializer.serialize(message)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "fields",
        [
            {"app_name": "My Event Log"},
            {"app_name": "a" * 49},
            {"proc_id": "p" * 129},
            {"msg_id": "m" * 33},
            {"msg_id": "café"},
            {"hostname": "h" * 256},
        ],
    )
    def test_header_fields_must_be_printable_ascii_within_limits(
        self, serializer, make_message, fields
    ):
        message = make_message(**fields)
        with pytest.raises(InvalidMessageError):
            serializer.render(message)

    @pytest.mark.unit
    def test_header_fields_at_maximum_length(self, serializer, make_message):
        message = make_message(app_name="a" * 48, proc_id="p" * 128, msg_id="m" * 32)
        line = serializer.render(message)
        assert f" {'a' * 48} {'p' * 128} {'m' * 32} - " in line

    @pytest.mark.unit
    def test_message_text_is_not_escaped(self, serializer, make_message):
        line = serializer.render(make_message(message='x="1" ]'))
        assert line.endswith('\ufeffx="1" ]')
