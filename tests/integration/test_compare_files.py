from __future__ import annotations

import io
from pathlib import Path

import pytest

from ldif_diff.compare import compare_files
from ldif_diff.config import CliOverrides, load_effective_config
from ldif_diff.errors import ConsistencyError, InvalidArgumentError, SourceNotFoundError

ORIG = """dn: cn=alpha,dc=x
cn: alpha
mail: a@x
sn: One

dn: cn=bravo,dc=x
cn: bravo

dn: uid=7,ou=People,dc=x
uid: 7
cn: Seven

"""

NEW = """dn: cn=alpha,dc=x
cn: alpha
mail: b@x
sn: One

dn: cn=charlie,dc=x
cn: charlie

dn: uid=7,ou=Staff,dc=x
uid: 7
cn: Seven
title: Boss

"""


def _write(path: Path, text: str) -> Path:
    path.write_bytes(text.encode("utf-8"))
    return path


def _compare(tmp_path: Path, orig: Path, new: Path, **overrides: object) -> str:
    config = load_effective_config(tmp_path, CliOverrides(**overrides))
    out = io.StringIO()
    compare_files(orig, new, config=config, out_stream=out)
    return out.getvalue()


def test_forward_diff_reports_change_remove_add_and_rename(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", ORIG)
    new = _write(tmp_path / "new.ldif", NEW)

    output = _compare(tmp_path, orig, new)

    assert output == (
        "\n"
        "dn: cn=alpha,dc=x\n"
        "- mail: a@x\n"
        "+ mail: b@x\n"
        "\n"
        "- cn=bravo,dc=x\n"
        "- cn: bravo\n"
        "\n"
        "+ cn=charlie,dc=x\n"
        "+ cn: charlie\n"
        "\n"
        "- uid=7,ou=People,dc=x\n"
        "+ uid=7,ou=Staff,dc=x\n"
        "+ title: Boss\n"
    )


def test_swapping_inputs_swaps_signs_and_rename_headers(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", ORIG)
    new = _write(tmp_path / "new.ldif", NEW)

    output = _compare(tmp_path, new, orig)

    assert output == (
        "\n"
        "dn: cn=alpha,dc=x\n"
        "+ mail: a@x\n"
        "- mail: b@x\n"
        "\n"
        "+ cn=bravo,dc=x\n"
        "+ cn: bravo\n"
        "\n"
        "- cn=charlie,dc=x\n"
        "- cn: charlie\n"
        "\n"
        "- uid=7,ou=Staff,dc=x\n"
        "+ uid=7,ou=People,dc=x\n"
        "- title: Boss\n"
    )


def test_file_against_itself_produces_no_output(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", ORIG)

    assert _compare(tmp_path, orig, orig) == ""


def test_rename_with_identical_attributes_emits_only_headers(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", "dn: uid=42,ou=People,dc=x\nuid: 42\ncn: A\n\n")
    new = _write(tmp_path / "new.ldif", "dn: uid=42,ou=Staff,dc=x\nuid: 42\ncn: A\n\n")

    output = _compare(tmp_path, orig, new)

    assert output == "\n- uid=42,ou=People,dc=x\n+ uid=42,ou=Staff,dc=x\n"


def test_duplicate_values_collapse_before_diffing(tmp_path: Path) -> None:
    orig = _write(
        tmp_path / "orig.ldif",
        "dn: cn=a,dc=x\ndescription: b\ndescription: a\ndescription: a\n\n",
    )
    new = _write(tmp_path / "new.ldif", "dn: cn=a,dc=x\ndescription: a\ndescription: c\n\n")

    output = _compare(tmp_path, orig, new)

    assert output == "\ndn: cn=a,dc=x\n- description: b\n+ description: c\n"


def test_attribute_name_case_change_alone_is_not_a_difference(tmp_path: Path) -> None:
    orig = _write(
        tmp_path / "orig.ldif",
        "dn: cn=a,dc=x\nobjectClass: person\nmail: a@x\n\ndn: cn=b,dc=x\nCN: b\nsn: old\n\n",
    )
    new = _write(
        tmp_path / "new.ldif",
        "dn: cn=a,dc=x\nobjectclass: person\nMail: a@x\n\ndn: cn=b,dc=x\ncn: b\nSN: new\n\n",
    )

    output = _compare(tmp_path, orig, new)

    assert output == "\ndn: cn=b,dc=x\n+ sn: new\n- sn: old\n"


def test_disabled_identifier_reports_rename_as_remove_and_add(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", "dn: uid=42,ou=People,dc=x\nuid: 42\n\n")
    new = _write(tmp_path / "new.ldif", "dn: uid=42,ou=Staff,dc=x\nuid: 42\n\n")

    output = _compare(tmp_path, orig, new, unique_identifier="none")

    assert output == (
        "\n- uid=42,ou=People,dc=x\n- uid: 42\n"
        "\n+ uid=42,ou=Staff,dc=x\n+ uid: 42\n"
    )


def test_crlf_sources_with_matching_separator_length(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", ORIG.replace("\n", "\r\n"))
    new = _write(tmp_path / "new.ldif", NEW.replace("\n", "\r\n"))

    output = _compare(tmp_path, orig, new, line_separator_bytes=2)

    assert output.splitlines()[:4] == ["", "dn: cn=alpha,dc=x", "- mail: a@x", "+ mail: b@x"]


def test_summary_counts_identity_kinds(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", ORIG)
    new = _write(tmp_path / "new.ldif", NEW)
    config = load_effective_config(tmp_path)

    summary = compare_files(orig, new, config=config, out_stream=io.StringIO())

    assert (summary.orig_records, summary.new_records) == (3, 3)
    assert summary.pairs == 4
    assert summary.diff_records == 4
    assert (summary.changed, summary.renamed, summary.added, summary.removed) == (1, 1, 1, 1)


def test_progress_is_reported_every_interval(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", ORIG)
    new = _write(tmp_path / "new.ldif", NEW)
    config = load_effective_config(tmp_path, CliOverrides(progress_interval=2))
    progress = io.StringIO()

    compare_files(orig, new, config=config, out_stream=io.StringIO(), progress_stream=progress)

    assert progress.getvalue().splitlines() == ["Processed 2 entries", "Processed 4 entries"]


def test_missing_source_names_the_path(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", ORIG)
    missing = tmp_path / "missing.ldif"
    config = load_effective_config(tmp_path)

    with pytest.raises(SourceNotFoundError, match="missing.ldif"):
        compare_files(orig, missing, config=config, out_stream=io.StringIO())


def test_unterminated_final_record_aborts_run(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", "dn: cn=a,dc=x\ncn: a\n")
    new = _write(tmp_path / "new.ldif", "dn: cn=a,dc=x\ncn: a\n\n")
    config = load_effective_config(tmp_path)

    with pytest.raises(InvalidArgumentError):
        compare_files(orig, new, config=config, out_stream=io.StringIO())


def test_ambiguous_identifier_aborts_before_any_output(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", "dn: cn=a,dc=x\ncn: a\n\ndn: uid=1,ou=A,dc=x\nuid: 1\n\n")
    new = _write(
        tmp_path / "new.ldif",
        "dn: cn=a,dc=x\ncn: b\n\ndn: uid=1,ou=Z,dc=x\nuid: 1\n\ndn: uid=1,ou=B,dc=x\nuid: 1\n\n",
    )
    config = load_effective_config(tmp_path)
    out = io.StringIO()

    with pytest.raises(ConsistencyError):
        compare_files(orig, new, config=config, out_stream=out)

    assert out.getvalue() == ""


def test_output_written_before_abort_is_kept(tmp_path: Path) -> None:
    orig = _write(tmp_path / "orig.ldif", "dn: cn=a,dc=x\ncn: a\n\ndn: cn=b,dc=x\ncn: b\n")
    new = _write(tmp_path / "new.ldif", "dn: cn=a,dc=x\ncn: z\n\ndn: cn=b,dc=x\ncn: b\n\n")
    config = load_effective_config(tmp_path)
    out = io.StringIO()

    with pytest.raises(InvalidArgumentError, match="cn=b,dc=x"):
        compare_files(orig, new, config=config, out_stream=out)

    assert out.getvalue() == "\ndn: cn=a,dc=x\n- cn: a\n+ cn: z\n"
