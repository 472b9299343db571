"""Tests for Java command-line assembly."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from melon_client.launching.command import (
    MAIN_CLASS,
    build_classpath,
    build_launch_plan,
    initial_heap_gb,
)
from melon_client.launching.identity import resolve_identity
from melon_client.utils.data_model import SessionIdentity
from melon_client.utils.exceptions import BuildError, MissingVersion

STEVE_UUID = "e4270dab-5764-390b-8cc6-0cf94d9aeee9"


class TestInitialHeap:
    @pytest.mark.parametrize("max_gb, expected", [(1, 1), (2, 1), (3, 1), (4, 2), (5, 2), (16, 8)])
    def test_half_with_floor(self, max_gb: int, expected: int) -> None:
        assert initial_heap_gb(max_gb) == expected


class TestBuildClasspath:
    def test_uses_host_separator(self, tmp_path: Path) -> None:
        classpath = build_classpath(tmp_path, "1.20.4", ["extra.jar"])
        assert classpath.split(os.pathsep) == [
            str(tmp_path / "libraries"),
            str(tmp_path / "versions" / "1.20.4.jar"),
            "extra.jar",
        ]

    def test_separator_resolved_at_build_time(self, tmp_path: Path) -> None:
        with patch("melon_client.launching.command.os.pathsep", ";"):
            classpath = build_classpath(tmp_path, "1.20.4")
        assert classpath == f"{tmp_path / 'libraries'};{tmp_path / 'versions' / '1.20.4.jar'}"


class TestBuildLaunchPlan:
    def test_argument_order(self, install_root: Path, steve_identity: SessionIdentity) -> None:
        plan = build_launch_plan("1.20.4", install_root, steve_identity, 4)

        assert plan.executable == "java"
        assert list(plan.arguments) == [
            "-Xmx4G",
            "-Xms2G",
            f"-Djava.library.path={install_root / 'natives'}",
            "-cp",
            build_classpath(install_root, "1.20.4"),
            MAIN_CLASS,
            "--username", "Steve_01",
            "--uuid", STEVE_UUID,
            "--accessToken", "null",
            "--version", "1.20.4",
            "--gameDir", str(install_root),
        ]
        assert plan.working_directory == install_root
        assert plan.requested_memory_gb == 4
        assert plan.command[0] == "java"
        assert plan.command[1:] == list(plan.arguments)

    def test_one_gb_keeps_minimum_heap_of_one(self, install_root: Path, steve_identity: SessionIdentity) -> None:
        plan = build_launch_plan("1.20.4", install_root, steve_identity, 1)
        assert plan.arguments[:2] == ("-Xmx1G", "-Xms1G")

    @pytest.mark.parametrize("version_id", ["", None])
    def test_missing_version(self, version_id, install_root: Path, steve_identity: SessionIdentity) -> None:
        with patch("melon_client.launching.command.build_classpath") as mock_classpath:
            with pytest.raises(MissingVersion) as exc_info:
                build_launch_plan(version_id, install_root, steve_identity, 4)
        assert isinstance(exc_info.value, BuildError)
        mock_classpath.assert_not_called()

    def test_zero_memory_rejected(self, install_root: Path, steve_identity: SessionIdentity) -> None:
        with pytest.raises(ValidationError):
            build_launch_plan("1.20.4", install_root, steve_identity, 0)

    def test_memory_above_bound_rejected(self, install_root: Path, steve_identity: SessionIdentity) -> None:
        with pytest.raises(ValueError, match="exceeds the 4 GiB budget"):
            build_launch_plan("1.20.4", install_root, steve_identity, 6, max_memory_gb=4)

    def test_memory_at_bound_accepted(self, install_root: Path, steve_identity: SessionIdentity) -> None:
        plan = build_launch_plan("1.20.4", install_root, steve_identity, 4, max_memory_gb=4)
        assert plan.requested_memory_gb == 4

    def test_extra_classpath_and_java(self, install_root: Path, steve_identity: SessionIdentity) -> None:
        plan = build_launch_plan(
            "fabric-loader-0.15.7-1.20.4",
            install_root,
            steve_identity,
            8,
            extra_classpath=["/opt/fabric/loader.jar"],
            java_executable="/usr/lib/jvm/java-17/bin/java",
        )
        classpath = plan.arguments[plan.arguments.index("-cp") + 1]
        assert classpath.split(os.pathsep)[-1] == "/opt/fabric/loader.jar"
        assert str(install_root / "versions" / "fabric-loader-0.15.7-1.20.4.jar") in classpath
        assert plan.executable == "/usr/lib/jvm/java-17/bin/java"

    def test_environment_defaults_to_os_environ(self, install_root: Path, steve_identity: SessionIdentity) -> None:
        with patch.dict(os.environ, {"MELON_TEST_VAR": "1"}):
            plan = build_launch_plan("1.20.4", install_root, steve_identity, 2)
        assert plan.environment["MELON_TEST_VAR"] == "1"

    def test_explicit_environment(self, install_root: Path, steve_identity: SessionIdentity) -> None:
        plan = build_launch_plan("1.20.4", install_root, steve_identity, 2, environment={"A": "b"})
        assert plan.environment == {"A": "b"}

    def test_end_to_end_offline_steve(self, install_root: Path) -> None:
        identity = resolve_identity('offline', "Steve_01")
        plan = build_launch_plan("1.20.4", install_root, identity, 4)

        args = list(plan.arguments)
        assert args[:2] == ["-Xmx4G", "-Xms2G"]
        start = args.index("--username")
        assert args[start:start + 8] == [
            "--username", "Steve_01",
            "--uuid", STEVE_UUID,
            "--accessToken", "null",
            "--version", "1.20.4",
        ]

    def test_plan_is_immutable(self, install_root: Path, steve_identity: SessionIdentity) -> None:
        plan = build_launch_plan("1.20.4", install_root, steve_identity, 2)
        with pytest.raises(ValidationError):
            plan.requested_memory_gb = 3


class TestRedactedCommand:
    def test_token_masked(self, install_root: Path) -> None:
        identity = SessionIdentity(display_name="Alex", unique_id="069a79f444e94726a5befca90e38aaf5",
                                   credential_token="ms-token-123")
        plan = build_launch_plan("1.20.4", install_root, identity, 2)

        redacted = plan.redacted_command()
        assert "ms-token-123" not in redacted
        assert redacted[redacted.index("--accessToken") + 1] == "********"
        assert "ms-token-123" in plan.command

    def test_offline_token_left_as_is(self, install_root: Path, steve_identity: SessionIdentity) -> None:
        plan = build_launch_plan("1.20.4", install_root, steve_identity, 2)
        assert plan.redacted_command() == plan.command
