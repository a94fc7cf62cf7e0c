from __future__ import annotations

import logging
from pathlib import Path

import allure

from command_runner.models import StatusType
from command_runner.reporting import OutputChannel, ReportedMessage, get_clickable_links_in_msg

pytestmark = [
    allure.epic("Command Execution"),
    allure.feature("Result Reporting"),
]


def test_relative_reference_becomes_file_uri_with_position() -> None:
    message = "error at ./src/app.py:12:4 while building"

    annotated = get_clickable_links_in_msg(message, base_dir=Path("/work/project"))

    assert annotated == "error at file:///work/project/src/app.py:12:4 while building"


def test_parent_reference_is_normalized() -> None:
    annotated = get_clickable_links_in_msg("see ../docs/readme.md", base_dir=Path("/work/project"))

    assert annotated == "see file:///work/docs/readme.md"


def test_absolute_path_after_stream_prefix_is_annotated() -> None:
    annotated = get_clickable_links_in_msg("stdout:/var/log/app.log:3\nstderr:")

    assert annotated == "stdout:file:///var/log/app.log:3\nstderr:"


def test_urls_and_plain_text_are_left_alone() -> None:
    message = "fetched https://example.com/a/b and reported not found"

    assert get_clickable_links_in_msg(message) == message


def test_annotation_is_idempotent() -> None:
    once = get_clickable_links_in_msg("./a/b.txt:1 and /tmp/x/y", base_dir=Path("/root"))

    assert get_clickable_links_in_msg(once, base_dir=Path("/root")) == once


def test_output_channel_records_logs_and_echoes(capsys, caplog) -> None:
    channel = OutputChannel(echo=True)

    with caplog.at_level(logging.INFO, logger="command_runner.reporting"):
        channel.show_message("all good")
        channel.show_error("it broke")

    captured = capsys.readouterr()
    assert channel.messages == [
        ReportedMessage(status=StatusType.SUCCESS, message="all good"),
        ReportedMessage(status=StatusType.ERROR, message="it broke"),
    ]
    assert channel.errors() == ["it broke"]
    assert captured.out == "all good\n"
    assert captured.err == "it broke\n"
    assert "Command failed: it broke" in caplog.text
