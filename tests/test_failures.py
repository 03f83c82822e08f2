# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for classifying cargo diagnostics."""

from __future__ import annotations

import re

import pytest

from cargoclean.failures import (
    FailureClassifier,
    FailureFamily,
    FailureSignature,
    classify_failure,
    default_signatures,
)


@pytest.mark.parametrize(
    ("output", "cause"),
    [
        ("error: `workspace.dependencies` was not defined", "workspace issue"),
        (
            "error: dependency (serde) was not found in `workspace.dependencies`",
            "workspace issue",
        ),
        (
            "error inheriting `edition` from workspace root manifest's `workspace.package.edition`",
            "workspace inheritance error",
        ),
        ("error: failed to read `/tmp/ws/crates/utils/Cargo.toml`", "missing dependency file"),
        ("No such file or directory (os error 2): /tmp/ws/crates/utils/Cargo.toml", "missing dependency file"),
        ("error: failed to load manifest for dependency `utils`", "missing dependency manifest"),
        (
            "error: failed to load manifest for workspace member `/tmp/ws/crates/cli`",
            "workspace member manifest issue",
        ),
        (
            "error: manifest is missing either a `[package]` or a `[workspace]`",
            "malformed manifest",
        ),
        ("error: failed to parse manifest at `/tmp/ws/Cargo.toml`", "manifest parsing error"),
    ],
)
def test_known_signatures_are_workspace_issues(output: str, cause: str) -> None:
    verdict = classify_failure(output)

    assert verdict.workspace_issue
    assert verdict.cause == cause


def test_unrecognised_output_is_a_genuine_failure() -> None:
    verdict = classify_failure("error: could not compile `app` due to 3 previous errors")

    assert not verdict.workspace_issue
    assert verdict.cause is None
    assert verdict.hints == ()


def test_first_matching_signature_supplies_the_cause() -> None:
    output = "failed to load manifest for dependency `core`\ncaused by: `workspace.dependencies` missing `utils`"

    verdict = classify_failure(output)

    assert verdict.cause == "workspace issue"
    assert verdict.family is FailureFamily.MISSING_DEPENDENCY


def test_patterns_do_not_span_lines() -> None:
    verdict = classify_failure("error inheriting `version`\nfrom workspace root manifest")

    assert not verdict.workspace_issue


def test_missing_file_path_is_extracted() -> None:
    output = (
        "error: failed to load manifest for workspace member `/ws/crates/core`\n"
        "Caused by:\n  failed to read `/ws/crates/utils/Cargo.toml`\n"
    )

    verdict = classify_failure(output)

    assert verdict.family is FailureFamily.MISSING_FILE
    assert verdict.missing_file == "/ws/crates/utils/Cargo.toml"
    assert verdict.hints == ("This is likely due to missing dependency files in the workspace",)


def test_malformed_manifest_hint_names_manifest() -> None:
    verdict = classify_failure("failed to parse manifest at `/ws/Cargo.toml`")

    assert verdict.family is FailureFamily.MALFORMED_MANIFEST
    assert "This is due to a malformed Cargo.toml file" in verdict.hints


def test_missing_file_signature_follows_manifest_name() -> None:
    classifier = FailureClassifier(manifest_name="Manifest.toml")

    assert classifier.classify("failed to read `/ws/Manifest.toml`").workspace_issue
    assert not classifier.classify("failed to read `/ws/Cargo.lock`").workspace_issue


def test_custom_signature_table_can_mark_non_workspace_patterns() -> None:
    signatures = (
        *default_signatures(),
        FailureSignature(
            pattern=re.compile(r"could not compile"),
            cause="compile error",
            family=FailureFamily.WORKSPACE,
            workspace_issue=False,
        ),
    )
    classifier = FailureClassifier(signatures)

    assert len(classifier.signatures) == len(default_signatures()) + 1
    assert not classifier.classify("error: could not compile `app`").workspace_issue


def test_cause_comes_from_first_workspace_issue_signature() -> None:
    signatures = (
        FailureSignature(
            pattern=re.compile(r"failed to load manifest"),
            cause="generic manifest failure",
            family=FailureFamily.WORKSPACE,
            workspace_issue=False,
        ),
        *default_signatures(),
    )

    verdict = FailureClassifier(signatures).classify("error: failed to load manifest for dependency `utils`")

    assert verdict.workspace_issue
    assert verdict.cause == "missing dependency manifest"
    assert verdict.family is FailureFamily.MISSING_DEPENDENCY
